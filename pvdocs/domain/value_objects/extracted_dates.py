"""Value objects describing dates and identifiers found in a document."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pvdocs.constants import (
    DATE_TYPE_ISSUE,
    DATE_TYPE_METER,
    DATE_TYPE_SUBMISSION,
    DATE_TYPE_UNKNOWN,
)

DATE_TYPES = frozenset({DATE_TYPE_SUBMISSION, DATE_TYPE_ISSUE, DATE_TYPE_METER, DATE_TYPE_UNKNOWN})


@dataclass(frozen=True)
class ExtractedDates:
    """Named dates produced by one extraction (ISO ``YYYY-MM-DD`` strings)."""

    submitted_at: Optional[str] = None
    issued_at: Optional[str] = None
    meter_date: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.submitted_at or self.issued_at or self.meter_date)

    def to_dict(self) -> dict:
        return {
            "submittedAt": self.submitted_at,
            "issuedAt": self.issued_at,
            "meterDate": self.meter_date,
        }


@dataclass(frozen=True)
class ExistingExtraction:
    """Snapshot of extraction results a document already carried before the batch."""

    submitted_at: Optional[str] = None
    issued_at: Optional[str] = None
    pv_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "submittedAt": self.submitted_at,
            "issuedAt": self.issued_at,
            "pvId": self.pv_id,
        }


@dataclass(frozen=True)
class DateCandidate:
    """A single date found in OCR text, tagged by the keywords around it."""

    date: str
    type: str = DATE_TYPE_UNKNOWN
    confidence: float = 0.5
    context: str = ""

    def __post_init__(self) -> None:
        if self.type not in DATE_TYPES:
            object.__setattr__(self, "type", DATE_TYPE_UNKNOWN)
        confidence = self.confidence
        if not isinstance(confidence, (int, float)):
            confidence = 0.0
        object.__setattr__(self, "confidence", max(0.0, min(float(confidence), 1.0)))

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "type": self.type,
            "confidence": self.confidence,
            "context": self.context,
        }
