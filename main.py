"""
Event Guest Manager - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from guestmanager.core.config import settings
from guestmanager.core.db import engine, Base
from guestmanager.api import routes_admin, routes_guest, routes_public

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

app = FastAPI(
    title="Event Guest Manager",
    description="Guest lists, table seating, QR check-in and plan limits for events",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_guest.router, prefix="/guest", tags=["guest"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
