from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .app_logging import configure_logging
from .api.v1 import dependencies
from .api.v1.routers import batch_ocr, ocr

load_dotenv()
configure_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI):
  yield
  # Background runs still in flight are abandoned; workers stop with the process.
  dependencies.close_batch_controller()


app = FastAPI(title="PV Documents OCR Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

api_router = APIRouter(prefix="/api")
api_router.include_router(batch_ocr.router)
api_router.include_router(ocr.router)

app.include_router(api_router)
