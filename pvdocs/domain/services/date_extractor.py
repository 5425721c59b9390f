"""
DateExtractor domain service.

Finds dates in OCR'd text of Taiwanese permit documents and tags each one as
a submission, issue or meter installation date from the keywords around it.
Both ROC (Minguo) and Western year notations are recognised.
"""
import re
from datetime import date
from typing import Iterable, List, Optional, Sequence

from pvdocs.constants import (
    DATE_TYPE_ISSUE,
    DATE_TYPE_METER,
    DATE_TYPE_SUBMISSION,
    DATE_TYPE_UNKNOWN,
)
from pvdocs.domain.value_objects.extracted_dates import DateCandidate, ExtractedDates

ROC_YEAR_OFFSET = 1911

# (pattern, year notation) in scan order.
_ROC = "roc"
_WESTERN = "western"
_ROC_IF_SMALL = "roc_if_small"

DATE_PATTERNS = (
    (re.compile(r"(?:中華)?民國\s*(\d{2,3})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日"), _ROC),
    (re.compile(r"(?<!\d)(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日"), _WESTERN),
    (re.compile(r"(?<!\d)(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})"), _WESTERN),
    (re.compile(r"(?<!\d)(\d{2,3})[/\-](\d{1,2})[/\-](\d{1,2})"), _ROC_IF_SMALL),
)

SUBMISSION_KEYWORDS = (
    "送件日", "申請日", "收件日", "收文日", "申請日期", "送件日期",
    "受理日", "受理日期", "來函", "收件編號", "收文號",
)

ISSUE_KEYWORDS = (
    "核發日", "發文日", "發照日", "發給日", "函覆日", "核准日",
    "同意日", "發文日期", "核發日期", "核定日", "生效日",
)

METER_KEYWORDS = (
    "掛表日", "掛錶日", "掛表日期", "掛錶日期", "併聯日", "併聯日期", "完成併聯", "裝表日",
)

KEYWORD_WINDOW = 50
CONTEXT_WINDOW = 100
TAGGED_CONFIDENCE = 0.9
UNTAGGED_CONFIDENCE = 0.5
MIN_YEAR = 1990
MAX_YEAR = 2100


class DateExtractor:
    """Extracts tagged date candidates from OCR text."""

    def __init__(
        self,
        submission_keywords: Sequence[str] = SUBMISSION_KEYWORDS,
        issue_keywords: Sequence[str] = ISSUE_KEYWORDS,
        meter_keywords: Sequence[str] = METER_KEYWORDS,
    ):
        # Checked in order; the first keyword family found near a date wins.
        self._keyword_families = (
            (DATE_TYPE_SUBMISSION, tuple(submission_keywords)),
            (DATE_TYPE_ISSUE, tuple(issue_keywords)),
            (DATE_TYPE_METER, tuple(meter_keywords)),
        )

    def extract(self, text: str) -> List[DateCandidate]:
        """
        Return every distinct valid date in ``text``, highest confidence first.

        Args:
            text: Full OCR text of a document

        Returns:
            Date candidates; each ISO date appears at most once
        """
        if not text:
            return []

        results: List[DateCandidate] = []
        seen = set()

        for pattern, notation in DATE_PATTERNS:
            for match in pattern.finditer(text):
                iso_date = _parse_match(match, notation)
                if iso_date is None or iso_date in seen:
                    continue
                seen.add(iso_date)

                start, end = match.span()
                nearby = text[max(0, start - KEYWORD_WINDOW): end + KEYWORD_WINDOW]
                date_type = self._classify(nearby)
                context = re.sub(r"\s+", " ", text[max(0, start - CONTEXT_WINDOW): end + CONTEXT_WINDOW])

                results.append(
                    DateCandidate(
                        date=iso_date,
                        type=date_type,
                        confidence=UNTAGGED_CONFIDENCE if date_type == DATE_TYPE_UNKNOWN else TAGGED_CONFIDENCE,
                        context=context,
                    )
                )

        return sorted(results, key=lambda candidate: -candidate.confidence)

    def _classify(self, nearby_text: str) -> str:
        for date_type, keywords in self._keyword_families:
            if any(keyword in nearby_text for keyword in keywords):
                return date_type
        return DATE_TYPE_UNKNOWN

    @staticmethod
    def best_dates(candidates: Iterable[DateCandidate]) -> ExtractedDates:
        """Pick the first candidate of each tagged type."""
        picked = {}
        for candidate in candidates:
            picked.setdefault(candidate.type, candidate.date)
        return ExtractedDates(
            submitted_at=picked.get(DATE_TYPE_SUBMISSION),
            issued_at=picked.get(DATE_TYPE_ISSUE),
            meter_date=picked.get(DATE_TYPE_METER),
        )


def _parse_match(match: "re.Match[str]", notation: str) -> Optional[str]:
    raw_year, month, day = (int(group) for group in match.groups())
    if notation == _ROC:
        year = raw_year + ROC_YEAR_OFFSET
    elif notation == _ROC_IF_SMALL and raw_year < 200:
        year = raw_year + ROC_YEAR_OFFSET
    else:
        year = raw_year

    if not (MIN_YEAR <= year <= MAX_YEAR):
        return None
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None
