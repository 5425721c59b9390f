"""
Extraction outcomes

Tagged results attached to an OCR task. Each variant only carries the data
that makes sense for it, so a failed task cannot also hold extracted dates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from pvdocs.constants import MESSAGE_CANCELLED

from .extracted_dates import DateCandidate, ExistingExtraction, ExtractedDates


@dataclass(frozen=True)
class ExtractionSucceeded:
    """The OCR service answered; an empty payload means nothing was found."""

    dates: ExtractedDates = field(default_factory=ExtractedDates)
    pv_id: Optional[str] = None

    @property
    def found_nothing(self) -> bool:
        return self.dates.is_empty() and not self.pv_id


@dataclass(frozen=True)
class ExtractionFailed:
    reason: str


@dataclass(frozen=True)
class ExtractionCancelled:
    reason: str = MESSAGE_CANCELLED


@dataclass(frozen=True)
class AlreadyProcessed:
    existing: ExistingExtraction = field(default_factory=ExistingExtraction)


@dataclass(frozen=True)
class NeedsReview:
    """Reserved for ambiguous extractions; the runner does not produce it yet."""

    candidates: Tuple[DateCandidate, ...] = ()


ExtractionOutcome = Union[ExtractionSucceeded, ExtractionFailed, ExtractionCancelled]
TaskResult = Union[ExtractionSucceeded, ExtractionFailed, ExtractionCancelled, AlreadyProcessed, NeedsReview]
