"""ExtractDocumentDates Query - finds tagged dates in OCR'd document text."""
from dataclasses import dataclass
from typing import Optional

from pvdocs.application.dto.batch_dto import DocumentDatesDTO
from pvdocs.domain.services.date_extractor import DateExtractor


@dataclass(frozen=True)
class ExtractDocumentDatesQuery:
    text: str


class ExtractDocumentDatesHandler:
    """Handles ExtractDocumentDates queries."""

    def __init__(self, extractor: Optional[DateExtractor] = None):
        self._extractor = extractor or DateExtractor()

    def handle(self, query: ExtractDocumentDatesQuery) -> DocumentDatesDTO:
        candidates = self._extractor.extract(query.text)
        best = DateExtractor.best_dates(candidates)
        return DocumentDatesDTO(
            candidates=[candidate.to_dict() for candidate in candidates],
            best=best.to_dict(),
        )
