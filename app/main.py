# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from app.routes import documents, auth
from app.config import settings
from app.core.errors import VaultError
from app.db.base import init_db

# Middlewares
from app.middleware.auth_middleware import AuthMiddleware

# Logging
from app.core.logging_config import get_logger

logger = get_logger("smartvault")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to the database before serving; without it the service cannot run"""
    try:
        init_db()
        logger.info("Database connected successfully")
    except Exception as e:
        logger.critical(f"Error connecting to database: {e}", exc_info=True)
        raise SystemExit(1)
    yield


# Application
app = FastAPI(
    title="Smart Document Vault API",
    description="Document vault with OCR and auto-categorization",
    version=settings.VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin for origin in settings.CORS_ORIGINS if origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication
app.add_middleware(AuthMiddleware)


@app.exception_handler(VaultError)
async def vault_error_handler(request: Request, exc: VaultError):
    """Structured body for every domain error"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.cause})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Routes
app.include_router(auth.router, prefix=f"{settings.API_V1_STR}/auth", tags=["auth"])
app.include_router(
    documents.router, prefix=f"{settings.API_V1_STR}/document", tags=["documents"]
)


@app.get("/")
async def root():
    return {"message": "Smart Document Vault API is Running..."}


@app.get(f"{settings.API_V1_STR}/health")
async def health_check():
    """Check that the API is up"""
    return {"status": "ok", "version": app.version}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
