from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from .utils.rate_limit import LoginThrottle
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error on {request.method} {request.url.path}: {exc.body()['error']}")
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=exc.headers)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.body())


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Madarik Identity API", version="0.1.0")
    app.state.login_throttle = LoginThrottle(
        max_attempts=ApplicationConfig.LOGIN_MAX_ATTEMPTS,
        window=timedelta(minutes=ApplicationConfig.LOGIN_WINDOW_MINUTES),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from madarik_identity.api.routes import admin, audit, auth, health_check, invitation, user, users

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(audit.router, tags=["Audit"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
