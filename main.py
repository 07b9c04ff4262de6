import os

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from lifespan import lifespan

from interface.middleware import limiter, register_exception_handlers
from interface.routers import (
    account_router,
    auth_router,
    chatbot_router,
    exercise_router,
    system_router,
    upload_router,
    workout_router,
    workout_session_router,
)
from interface.schemas import success_response
from utils import CorsSettings, get_app_settings, get_upload_settings
from utils.logging_config import log_network_io, setup_logger

app_settings = get_app_settings()
cors_settings = CorsSettings()
upload_settings = get_upload_settings()

app = FastAPI(title=app_settings.name, version=app_settings.version, lifespan=lifespan)

# API Routers
for router in (
    system_router,
    auth_router,
    account_router,
    exercise_router,
    workout_router,
    workout_session_router,
    upload_router,
    chatbot_router,
):
    app.include_router(router, prefix=app_settings.api_prefix)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_settings.allowed_origins,
    allow_methods=cors_settings.allowed_methods,
    allow_headers=cors_settings.allowed_headers,
    allow_credentials=cors_settings.allow_credentials,
    expose_headers=cors_settings.expose_headers,
)
# Add SlowAPI middleware
app.add_middleware(SlowAPIMiddleware)

os.makedirs(upload_settings.directory, exist_ok=True)
app.mount(
    f"/{upload_settings.directory}",
    StaticFiles(directory=upload_settings.directory),
    name="uploads",
)

logger = setup_logger("main", "main.log")
network_logger = setup_logger("network", "network.log")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response: Response = await call_next(request)
    log_network_io(
        logger=network_logger,
        endpoint=request.url.path,
        method=request.method,
        response_status=response.status_code,
    )
    return response


@app.get("/")
async def read_root():
    """API root endpoint."""
    return success_response(
        {
            "name": app_settings.name,
            "version": app_settings.version,
            "docs": "/docs",
            "apiPrefix": app_settings.api_prefix,
        },
        f"Welcome to {app_settings.name}",
        status.HTTP_200_OK,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=app_settings.host, port=app_settings.port, reload=app_settings.debug_mode)
