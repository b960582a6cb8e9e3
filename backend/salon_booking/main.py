import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .database import init_db
from .redis_client import redis_client
from .routers import bookings, slots

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating database tables...")
    init_db()
    yield
    logger.info("Shutting down salon booking backend")


app = FastAPI(title="Salon Booking API", lifespan=lifespan)

app.include_router(bookings.router)
app.include_router(slots.router)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "redis": redis_client.ping() if redis_client is not None else None,
    }
