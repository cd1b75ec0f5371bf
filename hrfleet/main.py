import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hrfleet.api.achievements import router as achievements_router
from hrfleet.api.auth import router as auth_router
from hrfleet.api.employees import router as employees_router
from hrfleet.api.inventory import router as inventory_router
from hrfleet.api.leaves import router as leaves_router
from hrfleet.api.reports import router as reports_router
from hrfleet.api.stats import router as stats_router
from hrfleet.api.system import router as system_router
from hrfleet.api.vehicles import router as vehicles_router
from hrfleet.core.config import Settings, settings
from hrfleet.core.db import AsyncSessionLocal, engine, init_db, wait_for_db
from hrfleet.core.errors import HrFleetError
from hrfleet.core.logging import setup_logging
from hrfleet.core.mailer import Mailer
from hrfleet.jobs.inspection_reminder import InspectionReminderJob

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.settings
    # TransientStorageError from here aborts startup
    await wait_for_db()
    await init_db()

    reminder_task = None
    if config.REMINDER_ENABLED:
        job = InspectionReminderJob(
            AsyncSessionLocal,
            app.state.mailer,
            logger=logging.getLogger("hrfleet.jobs.inspection_reminder"),
            thresholds=config.REMINDER_DAYS,
            hour=config.REMINDER_HOUR,
        )
        reminder_task = asyncio.create_task(job.run_forever())

    logger.info("hrfleet started")
    try:
        yield
    finally:
        if reminder_task is not None:
            reminder_task.cancel()
            try:
                await reminder_task
            except asyncio.CancelledError:
                pass
        await engine.dispose()
        logger.info("hrfleet stopped")


async def hrfleet_error_handler(request: Request, exc: HrFleetError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s in %dms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
    return response


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(
        title="hrfleet",
        version="0.1.0",
        description="HR & fleet administration API (REST + SQLAlchemy)",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.mailer = Mailer(config)
    app.state.log_buffer = setup_logging(config.LOG_LEVEL, config.LOG_BUFFER_SIZE)

    app.add_exception_handler(HrFleetError, hrfleet_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.middleware("http")(log_requests)

    @app.get("/health")
    async def health_check():
        return {
            "status": "ok",
            "service": "hrfleet",
        }

    @app.get("/")
    async def root():
        return {
            "message": "hrfleet is running",
            "docs": "/docs",
        }

    app.include_router(auth_router)
    app.include_router(employees_router)
    app.include_router(leaves_router)
    app.include_router(achievements_router)
    app.include_router(inventory_router)
    app.include_router(vehicles_router)
    app.include_router(reports_router)
    app.include_router(stats_router)
    app.include_router(system_router)
    return app


app = create_app()
