"""Unit tests for OCR response mapping."""
from pvdocs.infrastructure.ocr.response_mapper import (
    extraction_error_message,
    map_extraction_response,
)


def test_first_entry_of_each_type_wins():
    outcome = map_extraction_response(
        {
            "extractedDates": [
                {"date": "2024-01-01", "type": "submission"},
                {"date": "2024-02-02", "type": "submission"},
                {"date": "2024-03-03", "type": "unknown"},
                {"date": "2024-04-04", "type": "issue"},
            ]
        }
    )

    assert outcome.dates.submitted_at == "2024-01-01"
    assert outcome.dates.issued_at == "2024-04-04"
    assert outcome.dates.meter_date is None
    assert outcome.pv_id is None


def test_updated_fields_fill_missing_types():
    outcome = map_extraction_response(
        {
            "extractedDates": [{"date": "2024-01-01", "type": "submission"}],
            "updatedFields": {"submitted_at": "2023-12-31", "issued_at": "2024-02-02"},
        }
    )

    assert outcome.dates.submitted_at == "2024-01-01"
    assert outcome.dates.issued_at == "2024-02-02"


def test_malformed_entries_are_ignored():
    outcome = map_extraction_response(
        {"extractedDates": ["2024-01-01", {"type": "issue"}, {"date": "2024-05-05", "type": "meter_date"}]}
    )

    assert outcome.dates.issued_at is None
    assert outcome.dates.meter_date == "2024-05-05"


def test_non_mapping_body_is_empty_success():
    outcome = map_extraction_response(None)
    assert outcome.found_nothing


def test_pv_id_is_returned():
    outcome = map_extraction_response({"extractedDates": [], "pvId": 12345})
    assert outcome.pv_id == "12345"
    assert not outcome.found_nothing


def test_error_message_prefers_body():
    assert extraction_error_message(400, {"error": "缺少檔案資料"}) == "缺少檔案資料"
    assert extraction_error_message(400, {"details": "x"}) == "HTTP 400"
    assert extraction_error_message(502, None) == "HTTP 502"
