"""API v1 routers package."""

from . import batch_ocr, ocr

__all__ = [
    "batch_ocr",
    "ocr",
]
