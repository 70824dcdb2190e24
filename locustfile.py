import random
from locust import HttpUser, task, between, events
from locust.runners import WorkerRunner

BASE_URL = "http://127.0.0.1:9000"

MODEL_NAMES = ["Zaku", "Gundam", "Char's Zaku", "RX-78-2", "Unicorn", "Sazabi", "Barbatos"]
GRADES = ["HG", "RG", "MG", "PG", "SD"]
PROVINCES = ["ON", "QC", "BC", "AB", "MB", "NS"]
SORT_KEYS = ["name", "grade", "price", "date", "province"]


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("=" * 60)
    print("Starting catalog load test")
    print("=" * 60)

    if not isinstance(environment.runner, WorkerRunner):
        import requests

        try:
            response = requests.get(f"{BASE_URL}/api/v1/health", timeout=10)
            data = response.json()
            if data.get("store") == "up":
                print("Store reachable")
            else:
                print(f"Store is down, searches will fail: {data}")
        except Exception as e:
            print(f"Health check failed: {e}")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\n" + "=" * 60)
    print("Catalog load test finished")
    print("=" * 60)


class CatalogBrowser(HttpUser):

    wait_time = between(1, 3)

    host = BASE_URL

    @task(10)
    def browse_latest(self):
        page = random.randint(1, 5)
        with self.client.get(
                f"/api/v1/listings?page={page}",
                catch_response=True,
                name="GET /listings?page (default sort)"
        ) as response:
            if response.status_code == 200:
                try:
                    data = response.json()
                    if "listings" in data and data["pageNumber"] == page:
                        response.success()
                    else:
                        response.failure("Unexpected page payload")
                except ValueError:
                    response.failure("Invalid JSON response")
            else:
                response.failure(f"Status code: {response.status_code}")

    @task(8)
    def search_by_name(self):
        params = {"modelName": random.choice(MODEL_NAMES)}
        if random.random() < 0.5:
            params["sortBy"] = random.choice(SORT_KEYS)
            params["sortOrder"] = random.choice(["asc", "desc"])

        with self.client.get(
                "/api/v1/listings",
                params=params,
                catch_response=True,
                name="GET /listings?modelName (search)"
        ) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status code: {response.status_code}")

    @task(6)
    def filter_listings(self):
        low = random.randint(0, 500)
        params = {
            "modelGrade": random.choice(GRADES),
            "province": random.choice(PROVINCES),
            "minPrice": str(low),
            "maxPrice": str(random.choice([low + 50, low + 200, 1010])),
            "startDate": "2023-01-01",
            "endDate": "2025-12-31",
        }

        with self.client.get(
                "/api/v1/listings",
                params=params,
                catch_response=True,
                name="GET /listings (filters)"
        ) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status code: {response.status_code}")

    @task(2)
    def inverted_range(self):
        with self.client.get(
                "/api/v1/listings?minPrice=500&maxPrice=100",
                catch_response=True,
                name="GET /listings (inverted price range)"
        ) as response:
            if response.status_code == 400:
                response.success()
            else:
                response.failure(f"Expected 400, got {response.status_code}")

    @task(3)
    def view_index(self):
        with self.client.get(
                "/api/v1/listings/index",
                catch_response=True,
                name="GET /listings/index"
        ) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status code: {response.status_code}")


class HealthProbe(HttpUser):

    wait_time = between(5, 10)
    host = BASE_URL

    weight = 1

    @task
    def health(self):
        self.client.get("/api/v1/health", name="GET /health")
