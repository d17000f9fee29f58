"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from ddtrace import patch_all
from fastapi import FastAPI
from sqlmodel import SQLModel

from transcription_ingestor import db_models  # noqa: F401
from transcription_ingestor.dependencies import get_engine
from transcription_ingestor.routes import webhooks_router

logger = logging.getLogger(__name__)
patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    SQLModel.metadata.create_all(get_engine())
    logger.info("Database initialized")
    yield


app = FastAPI(title="Transcription Ingestor", lifespan=lifespan)
app.include_router(webhooks_router)


@app.get("/health")
def health():
    return {"status": "ok"}
