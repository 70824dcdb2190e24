from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gunpla_catalog.core.config import settings
from gunpla_catalog.routers import health
from gunpla_catalog.routers import listings as listings_router

logger = logging.getLogger("gunpla-catalog")
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "[startup] Gunpla catalog is up; collection %s.%s",
        settings.mongo_db, settings.listings_collection,
    )

    yield

    from gunpla_catalog.core.db import client
    client.close()
    logger.info("[shutdown] Mongo client closed")

app = FastAPI(
    title="Gunpla Catalog Service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(listings_router.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gunpla_catalog.main:app", host="127.0.0.1", port=settings.port, reload=True)
