import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel.core.config import settings
from hotel.core.exceptions import HotelError
from hotel.core.logging import setup_logging
from hotel.middleware.request_logger import RequestLoggerMiddleware

from hotel.api import bookings, guests, operations, rooms


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title="Hotel Management API",
    description="Guests, rooms and bookings with automatic room status reconciliation",
    version="0.1.0",
)

app.add_middleware(RequestLoggerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HotelError)
async def hotel_error_handler(request: Request, exc: HotelError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health")
async def health():
    return {"ok": True}


app.include_router(rooms.router)
app.include_router(guests.router)
app.include_router(bookings.router)
app.include_router(operations.router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")

    # Init DB
    from hotel.database import AsyncSessionLocal, init_db

    await init_db()

    if settings.seed_demo_data:
        from hotel.services.seed_service import seed_demo_data

        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)

    # Start scheduler
    from hotel.services.scheduler_service import scheduler_service

    scheduler_service.start()

    # Первая сверка сразу при старте, не дожидаясь интервала (non-blocking)
    if settings.enable_room_status_sweep and settings.sweep_on_startup:
        from hotel.jobs.room_status_job import reconcile_room_statuses_job

        logger.info("🔄 Scheduling initial room status reconciliation...")
        asyncio.create_task(reconcile_room_statuses_job())


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")

    from hotel.services.scheduler_service import scheduler_service

    scheduler_service.shutdown()

    from hotel.database import engine

    await engine.dispose()
