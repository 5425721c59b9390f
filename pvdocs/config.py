from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Ensure environment variables from the repository root .env are available
# regardless of the working directory used to start the process.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")

OCR_FUNCTION_PATH = "functions/v1/ocr-extract-dates"


class Settings(BaseSettings):
  supabase_url: str = Field(default="", alias="SUPABASE_URL")
  ocr_function_url: str | None = Field(default=None, alias="OCR_FUNCTION_URL")
  ocr_access_token: str | None = Field(default=None, alias="OCR_ACCESS_TOKEN")
  ocr_request_timeout: float = Field(default=60.0, alias="OCR_REQUEST_TIMEOUT")
  batch_ocr_max_concurrent: int = Field(default=3, alias="BATCH_OCR_MAX_CONCURRENT")
  batch_ocr_max_batch_size: int = Field(default=50, alias="BATCH_OCR_MAX_BATCH_SIZE")
  batch_ocr_auto_update: bool = Field(default=True, alias="BATCH_OCR_AUTO_UPDATE")
  batch_ocr_max_pages: int = Field(default=1, alias="BATCH_OCR_MAX_PAGES")
  batch_ocr_force_reprocess: bool = Field(default=False, alias="BATCH_OCR_FORCE_REPROCESS")
  batch_ocr_max_attempts: int = Field(default=3, alias="BATCH_OCR_MAX_ATTEMPTS")

  def ensure_ocr_endpoint(self) -> str:
    explicit = (self.ocr_function_url or "").strip()
    if explicit:
      return explicit
    base = (self.supabase_url or "").strip()
    if not base:
      return ""
    return base.rstrip("/") + "/" + OCR_FUNCTION_PATH

  class Config:
    case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]
