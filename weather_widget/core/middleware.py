"""Middleware configuration."""

import secrets

from fastapi import FastAPI, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from weather_widget.config import Settings
from weather_widget.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

DEFAULT_RATE_LIMIT = "60/minute"
SESSION_COOKIE = "widget_session"
SESSION_COOKIE_MAX_AGE = 30 * 24 * 60 * 60

# Limits come only from the routers' @limiter.limit decorators
limiter = Limiter(key_func=get_remote_address)


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Get trusted host patterns from settings."""
    return [host.strip() for host in settings.trusted_hosts.split(",") if host.strip()]


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    # Trusted hosts - prevent host header injection
    trusted_hosts = get_trusted_hosts(settings)
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    app.state.limiter = limiter

    # Every browser gets its own widget state, keyed by this cookie
    @app.middleware("http")
    async def assign_widget_session(request: Request, call_next):
        """Attach the widget session id to the request, issuing a cookie if needed."""
        session_id = request.cookies.get(SESSION_COOKIE)
        is_new = not session_id
        if is_new:
            session_id = secrets.token_urlsafe(16)
        request.state.session_id = session_id

        response = await call_next(request)
        if is_new:
            response.set_cookie(
                SESSION_COOKIE,
                session_id,
                max_age=SESSION_COOKIE_MAX_AGE,
                httponly=True,
                samesite="lax",
            )
        return response

    return limiter
