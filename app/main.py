import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.pages import router as pages_router
from app.api.v1.bookings import router as bookings_router
from app.core.config import settings
from app.wiring.dependencies import get_booking_board, shutdown

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "booking_key", "booking_id", "date", "status", "paid", "action", "fields",
            "reason", "count", "provider", "path", "method", "event", "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Booking service starting")
    get_booking_board().start()
    yield
    logger.info("Booking service shutting down")
    shutdown()


app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking System", version="1.0.0", lifespan=lifespan)

app.include_router(pages_router, tags=["pages"])
app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
