from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    port: int = int(os.getenv("PORT", "9000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    mongo_db: str = os.getenv("MONGO_DB", "gunpla")
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
    listings_collection: str = os.getenv("LISTINGS_COLLECTION", "gundam-models")

    page_size: int = int(os.getenv("PAGE_SIZE", "10"))
    # maxPrice at or above this value means "no upper bound"
    open_price_ceiling: int = int(os.getenv("OPEN_PRICE_CEILING", "1010"))


settings = Settings()
