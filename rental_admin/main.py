import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rental_admin.core.config import settings
from rental_admin.api.v1.api import api_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Silence per-request connection logs from the backend client
logging.getLogger("urllib3").setLevel(logging.WARNING)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

async def log_backend_target():
    logger.info("Booking backend: %s", settings.backend_base_url)

app.add_event_handler("startup", log_backend_target)

@app.get("/")
async def root():
    return {"message": "Welcome to Rental Admin API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
