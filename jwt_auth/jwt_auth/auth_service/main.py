from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .config import settings
from .db import init_db
from .errors import DuplicateIdentity, InvalidCredentials
from .routes import auth, health, users
# Importing the event logger configures logging handlers
from .utils import event_logger  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    logger.info("%s started", settings.AUTH_SERVICE_NAME)
    yield


app = FastAPI(
    title="JWT Auth Service",
    description="User registration, login and bearer-token identity lookup",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(health.router)


@app.exception_handler(DuplicateIdentity)
async def duplicate_identity_handler(_request: Request, _exc: DuplicateIdentity):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Email already exists"})


@app.exception_handler(InvalidCredentials)
async def invalid_credentials_handler(_request: Request, _exc: InvalidCredentials):
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": "Invalid credentials"})
