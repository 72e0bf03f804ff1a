from contextlib import asynccontextmanager
from pathlib import Path
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .api.routes.appointments import router as appointments_router
from .api.routes.users import router as users_router
from .core.config import settings
from .core.database import DatabaseManager
from .core.errors import AppError, DatabaseConnectionError, SERVER_ERROR_BODY

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

static_dir = Path(settings.STATIC_DIR).resolve()


class ClientBundle(StaticFiles):
    """Static files whose directory may be missing, in which case every path is a 404."""

    async def check_config(self) -> None:
        if self.directory is not None and not Path(self.directory).is_dir():
            return
        await super().check_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Serving frontend from: {static_dir}")

    manager = DatabaseManager()
    app.state.db_manager = manager

    # Routes connect on demand, so a failure here is not fatal.
    if not settings.TESTING:
        try:
            await manager.acquire()
        except DatabaseConnectionError as e:
            logger.warning(f"Could not connect to MongoDB at startup: {e}")

    logger.info(f"Server started at http://{settings.HOST}:{settings.PORT}")
    yield

    logger.info("Shutting down...")
    await manager.close()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Users and appointments stored in MongoDB, plus the client bundle",
    lifespan=lifespan,
)


# Request logging and timing; also the last stop for unexpected errors
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"Error {request.method} {request.url.path}")
        response = JSONResponse(status_code=500, content=SERVER_ERROR_BODY)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response


# Outermost layer, so the 500s built above also carry CORS headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"Error {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.content)


# Include routers
app.include_router(users_router)
app.include_router(appointments_router)


# Health check endpoint
@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    manager = getattr(request.app.state, "db_manager", None)
    return {
        "status": "healthy",
        "database": "connected" if manager and manager.is_connected else "disconnected",
        "version": settings.VERSION,
    }


# Serve index at root only
@app.get("/", include_in_schema=False)
async def index():
    index_file = static_dir / "index.html"
    if not index_file.is_file():
        logger.error(f"Error sending index file: {index_file} not found")
        return PlainTextResponse("Server error", status_code=500)
    return FileResponse(index_file)


# Everything else not matched above comes from the client bundle
app.mount("/", ClientBundle(directory=static_dir, check_dir=False), name="static")


def run():
    import uvicorn
    uvicorn.run(
        "appointment_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
