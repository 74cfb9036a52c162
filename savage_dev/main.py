# Role: FastAPI app bootstrap. Loads environment config early, registers routers, and exposes health/docs endpoints.
# Missing credentials are a startup error, not a per-request one.

from contextlib import asynccontextmanager

from fastapi import FastAPI

import savage_dev.config
savage_dev.config.load_env()

from savage_dev.api.chat import router as chat_router
from savage_dev.api.state import router as state_router
from savage_dev.llm.gemini_client import MODEL_NAME


@asynccontextmanager
async def lifespan(app: FastAPI):
    savage_dev.config.require_api_key()
    yield


app = FastAPI(title="SAVAGE_DEV API", version="0.1.0", lifespan=lifespan)
app.include_router(chat_router)
app.include_router(state_router)


@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health, which model answers).
    return {
        "message": "SAVAGE_DEV API is running",
        "model": MODEL_NAME,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
