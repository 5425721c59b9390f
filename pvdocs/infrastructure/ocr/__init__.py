"""Adapters for the remote OCR date-extraction service."""

from .ocr_extraction_client import OcrExtractionClient
from .response_mapper import extraction_error_message, map_extraction_response

__all__ = ["OcrExtractionClient", "extraction_error_message", "map_extraction_response"]
