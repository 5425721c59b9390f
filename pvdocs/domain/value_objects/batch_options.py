"""BatchOcrOptions value object - configuration for one controller instance."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pvdocs.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_BATCH_SIZE,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_MAX_PAGES,
    DEFAULT_REQUEST_TIMEOUT,
)
from pvdocs.domain.exceptions import DomainValidationError

if TYPE_CHECKING:
    from pvdocs.config import Settings


@dataclass(frozen=True)
class BatchOcrOptions:
    """
    Immutable batch OCR options.

    Attributes:
        max_concurrent: Worker pool width (extraction calls in flight at once)
        max_batch_size: Hard cap on tasks admitted into one run
        auto_update: Ask the OCR service to write extracted data back to the document
        max_pages: Pages of the source document to scan
        force_reprocess: Default for ``force_reprocess_all`` when a run does not say
        max_attempts: Extraction attempts per document
        request_timeout: Seconds before a single HTTP call is abandoned
    """
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE
    auto_update: bool = True
    max_pages: int = DEFAULT_MAX_PAGES
    force_reprocess: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        for name in ("max_concurrent", "max_batch_size", "max_pages", "max_attempts"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise DomainValidationError(f"{name} must be a positive integer, got {value!r}")
        if self.request_timeout <= 0:
            raise DomainValidationError(f"request_timeout must be positive, got {self.request_timeout!r}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> BatchOcrOptions:
        """Build options from application settings."""
        return cls(
            max_concurrent=settings.batch_ocr_max_concurrent,
            max_batch_size=settings.batch_ocr_max_batch_size,
            auto_update=settings.batch_ocr_auto_update,
            max_pages=settings.batch_ocr_max_pages,
            force_reprocess=settings.batch_ocr_force_reprocess,
            max_attempts=settings.batch_ocr_max_attempts,
            request_timeout=settings.ocr_request_timeout,
        )
