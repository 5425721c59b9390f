"""Maps OCR service JSON bodies onto domain outcomes."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pvdocs.constants import DATE_TYPE_ISSUE, DATE_TYPE_METER, DATE_TYPE_SUBMISSION
from pvdocs.domain.value_objects.extracted_dates import ExtractedDates
from pvdocs.domain.value_objects.extraction_outcome import ExtractionSucceeded

# extractedDates[].type -> ExtractedDates attribute
_DATE_FIELDS = {
    DATE_TYPE_SUBMISSION: "submitted_at",
    DATE_TYPE_ISSUE: "issued_at",
    DATE_TYPE_METER: "meter_date",
}


def map_extraction_response(payload: Optional[Mapping[str, Any]]) -> ExtractionSucceeded:
    """
    Build a success outcome from a 2xx response body.

    The first entry of each date type wins; the service sorts entries by
    confidence. ``updatedFields`` (what the service wrote back) fills any type
    missing from ``extractedDates``. A body with nothing in it is still a
    success.
    """
    payload = payload if isinstance(payload, Mapping) else {}
    values: Dict[str, str] = {}

    for entry in payload.get("extractedDates") or []:
        if not isinstance(entry, Mapping):
            continue
        attribute = _DATE_FIELDS.get(entry.get("type"))
        date_value = entry.get("date")
        if attribute and date_value:
            values.setdefault(attribute, str(date_value))

    updated = payload.get("updatedFields")
    if isinstance(updated, Mapping):
        for key in ("submitted_at", "issued_at", "meter_date"):
            if updated.get(key):
                values.setdefault(key, str(updated[key]))

    pv_id = payload.get("pvId")
    return ExtractionSucceeded(
        dates=ExtractedDates(**values),
        pv_id=str(pv_id) if pv_id else None,
    )


def extraction_error_message(status_code: int, payload: Any) -> str:
    """Use the body's ``error`` message when present, else ``HTTP <status>``."""
    if isinstance(payload, Mapping):
        error = payload.get("error")
        if error:
            return str(error)
    return f"HTTP {status_code}"
