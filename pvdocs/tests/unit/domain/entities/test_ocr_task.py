"""Unit tests for the OcrTask entity."""
import pytest

from pvdocs.domain.entities.ocr_task import OcrTask
from pvdocs.domain.exceptions import InvalidTaskTransitionError
from pvdocs.domain.value_objects.extracted_dates import ExtractedDates
from pvdocs.domain.value_objects.extraction_outcome import (
    ExtractionCancelled,
    ExtractionFailed,
    ExtractionSucceeded,
)
from pvdocs.domain.value_objects.task_status import TaskState


class TestOcrTaskCreation:
    def test_pending_for_copies_display_metadata(self, make_document):
        document = make_document("doc-1", doc_type_code="PERMIT")

        task = OcrTask.pending_for(document)

        assert task.document_id == "doc-1"
        assert task.document_title == "Document doc-1"
        assert task.project_code == "PV-2024-001"
        assert task.project_id == "project-1"
        assert task.doc_type_code == "PERMIT"
        assert task.state == TaskState.PENDING
        assert task.error is None
        assert not task.already_processed

    def test_blank_title_becomes_untitled(self, make_document):
        task = OcrTask.pending_for(make_document("doc-1", title=""))
        assert task.document_title == "Untitled"

    def test_already_processed_carries_existing_data(self, make_document):
        document = make_document("doc-2", has_submitted_at=True, submitted_at="2024-03-01", pv_id="PV-9")

        task = OcrTask.already_processed_for(document)

        assert task.state == TaskState.ALREADY_PROCESSED
        assert task.already_processed
        assert task.existing_data.submitted_at == "2024-03-01"
        assert task.existing_data.pv_id == "PV-9"
        assert task.extracted_dates is None


class TestOcrTaskTransitions:
    def test_success_exposes_dates_and_identifier(self, make_document):
        outcome = ExtractionSucceeded(dates=ExtractedDates(issued_at="2024-05-02"), pv_id="PV-1")

        task = OcrTask.pending_for(make_document("doc-1")).mark_processing().apply_outcome(outcome)

        assert task.state == TaskState.SUCCESS
        assert task.extracted_dates.issued_at == "2024-05-02"
        assert task.extracted_pv_id == "PV-1"
        assert task.error is None

    def test_failure_sets_error_only(self, make_document):
        task = (
            OcrTask.pending_for(make_document("doc-1"))
            .mark_processing()
            .apply_outcome(ExtractionFailed(reason="HTTP 404"))
        )

        assert task.state == TaskState.ERROR
        assert task.error == "HTTP 404"
        assert task.extracted_dates is None

    def test_cancelled_becomes_skipped(self, make_document):
        task = OcrTask.pending_for(make_document("doc-1")).mark_processing().apply_outcome(ExtractionCancelled())

        assert task.state == TaskState.SKIPPED
        assert task.error == "cancelled"

    def test_pending_can_be_cancelled_directly(self, make_document):
        task = OcrTask.pending_for(make_document("doc-1")).mark_cancelled()
        assert task.state == TaskState.SKIPPED

    def test_completing_a_pending_task_is_rejected(self, make_document):
        task = OcrTask.pending_for(make_document("doc-1"))
        with pytest.raises(InvalidTaskTransitionError):
            task.mark_failed("boom")

    def test_already_processed_never_transitions(self, make_document):
        task = OcrTask.already_processed_for(make_document("doc-1", has_pv_id=True))
        with pytest.raises(InvalidTaskTransitionError):
            task.mark_processing()

    def test_transitions_return_new_instances(self, make_document):
        task = OcrTask.pending_for(make_document("doc-1"))
        processing = task.mark_processing()
        assert task.state == TaskState.PENDING
        assert processing.state == TaskState.PROCESSING


def test_to_dict_uses_camel_case(make_document):
    outcome = ExtractionSucceeded(dates=ExtractedDates(submitted_at="2024-01-02"))
    task = OcrTask.pending_for(make_document("doc-1")).mark_processing().mark_succeeded(outcome)

    data = task.to_dict()

    assert data["documentId"] == "doc-1"
    assert data["status"] == "success"
    assert data["extractedDates"] == {"submittedAt": "2024-01-02", "issuedAt": None, "meterDate": None}
    assert data["alreadyProcessed"] is False
    assert data["existingData"] is None
    assert data["candidates"] is None
