import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.scheduling import router as scheduling_router
from app.api.schemas import HealthResponseSchema
from app.core.config import settings
from app.wiring.dependencies import get_calendar

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "method", "path", "timezone", "range_start", "range_end", "slot_count", "status", "event_id", "error"
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        calendar = get_calendar()
    except ValueError as e:
        logger.warning("Calendar not configured", extra={"error": str(e)})
    else:
        if calendar.verify_connection():
            logger.info("Successfully connected to calendar")
        else:
            logger.warning(
                "Calendar connection check failed: GOOGLE_ACCESS_TOKEN present=%s GOOGLE_CALENDAR_ID present=%s",
                bool(settings.GOOGLE_ACCESS_TOKEN),
                bool(settings.GOOGLE_CALENDAR_ID),
            )
    yield


app = FastAPI(title="Appointment Booking", version="1.0.0", lifespan=lifespan)

app.include_router(scheduling_router, tags=["scheduling"])


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("Request", extra={"method": request.method, "path": request.url.path})
    return await call_next(request)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})


@app.get("/health", response_model=HealthResponseSchema)
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
