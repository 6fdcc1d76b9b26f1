from fastapi import Request, status
from fastapi.responses import JSONResponse
from typing import Callable
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.services.auth_service import auth_service

logger = logging.getLogger("smartvault")

DEFAULT_EXEMPT_PATHS = [
    "/api/auth/register",
    "/api/auth/login",
    "/api/health",
    "/docs",
    "/openapi.json",
    "/redoc",
]


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Verifies the bearer token on every route except the exempt ones.
    """

    def __init__(self, app, exempt_paths: list = None):
        """
        Args:
            app: The FastAPI application
            exempt_paths: Path prefixes that do NOT require authentication
        """
        super().__init__(app)
        self.exempt_paths = exempt_paths or DEFAULT_EXEMPT_PATHS

    def _unauthorized(self, detail: str, error_code: str) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": detail, "error_code": error_code},
            headers={"WWW-Authenticate": "Bearer"},
        )

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Flow:
        1. CORS preflight and exempt paths pass through
        2. The JWT is read from the Authorization header and verified
        3. The user id is stored in request.state.user
        4. Missing or invalid tokens get a 401 before the handler runs
        """
        if request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if path == "/" or any(
            path.startswith(exempt_path) for exempt_path in self.exempt_paths
        ):
            return await call_next(request)

        authorization = request.headers.get("Authorization")
        if not authorization or not authorization.startswith("Bearer "):
            logger.debug(f"Access denied to {path}: no token")
            return self._unauthorized("Not authorized, no token", "MISSING_TOKEN")

        token = authorization.replace("Bearer ", "", 1).strip()
        user_id = auth_service.decode_access_token(token)
        if not user_id:
            logger.debug(f"Access denied to {path}: invalid token")
            return self._unauthorized("Not authorized, token failed", "INVALID_TOKEN")

        request.state.user = {"id": user_id}
        logger.debug(f"Authenticated user {user_id} accessing {path}")

        return await call_next(request)
