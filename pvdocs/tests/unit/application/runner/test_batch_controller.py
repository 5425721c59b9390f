"""
Unit tests for BatchOcrController.

Exercises the run lifecycle end to end with scripted extraction clients:
classification, exactly-once completion, concurrency bound, cancellation and
the single-active-run rule.
"""
import threading
import time
from concurrent.futures import Executor, Future
from unittest.mock import Mock

import pytest
import requests

from pvdocs.application.runner.controller import BatchOcrController
from pvdocs.domain.exceptions import BatchRunActiveError
from pvdocs.domain.value_objects.batch_options import BatchOcrOptions
from pvdocs.domain.value_objects.extracted_dates import ExtractedDates
from pvdocs.domain.value_objects.extraction_outcome import (
    ExtractionFailed,
    ExtractionSucceeded,
)
from pvdocs.domain.value_objects.task_status import TaskState
from pvdocs.infrastructure.auth.session_provider import StaticSessionProvider
from pvdocs.infrastructure.ocr.ocr_extraction_client import OcrExtractionClient


class _ManualExecutor(Executor):
    """Holds submitted work until the test runs it."""

    def __init__(self):
        self._pending = []

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self._pending.append((future, fn, args, kwargs))
        return future

    def run_pending(self):
        while self._pending:
            future, fn, args, kwargs = self._pending.pop(0)
            try:
                future.set_result(fn(*args, **kwargs))
            except BaseException as exc:  # noqa: BLE001
                future.set_exception(exc)


class _ScriptedClient:
    def __init__(self, outcomes=None, default=None, on_call=None):
        self._outcomes = outcomes or {}
        self._default = default or ExtractionSucceeded()
        self._on_call = on_call
        self._lock = threading.Lock()
        self.calls = []

    def extract(self, document_id, doc_type_code, cancellation):
        with self._lock:
            self.calls.append(document_id)
        if self._on_call is not None:
            self._on_call(document_id)
        return self._outcomes.get(document_id, self._default)


def _response(status_code, payload):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestStart:
    def test_no_eligible_documents(self, make_document):
        client = _ScriptedClient()
        controller = BatchOcrController(client)

        result = controller.start([make_document(str(i), has_drive_file=False) for i in range(3)])

        assert result.started is False
        assert result.message
        assert controller.tasks == ()
        assert client.calls == []
        assert not controller.is_running

    def test_already_processed_only_batch(self, make_document):
        client = _ScriptedClient()
        controller = BatchOcrController(client)
        documents = [make_document(f"doc-{i}", has_submitted_at=True) for i in range(5)]

        result = controller.start(documents)

        assert result.started is True
        assert result.processed == 0
        assert result.already_processed == 5
        progress = controller.progress
        assert progress.total == 0
        assert progress.skipped == 5
        assert all(task.state == TaskState.ALREADY_PROCESSED for task in controller.tasks)
        assert client.calls == []

    def test_every_task_settles_exactly_once(self, make_document):
        client = _ScriptedClient(
            outcomes={"doc-2": ExtractionFailed(reason="HTTP 500")},
            default=ExtractionSucceeded(dates=ExtractedDates(issued_at="2024-01-01")),
        )
        controller = BatchOcrController(client, BatchOcrOptions(max_concurrent=3))
        documents = [make_document(f"doc-{i}") for i in range(7)] + [make_document("done", has_pv_id=True)]

        result = controller.start(documents)

        assert result.processed == 7
        assert sorted(client.calls) == sorted(f"doc-{i}" for i in range(7))
        progress = controller.progress
        assert progress.completed == 7
        assert progress.success == 6
        assert progress.error == 1
        assert progress.skipped == 1
        tasks = controller.tasks
        assert all(task.is_terminal() for task in tasks[:7])
        assert tasks[2].error == "HTTP 500"
        assert tasks[0].extracted_dates.issued_at == "2024-01-01"
        assert tasks[7].state == TaskState.ALREADY_PROCESSED
        assert not controller.is_running

    def test_force_reprocess_defaults_to_options(self, make_document):
        client = _ScriptedClient()
        controller = BatchOcrController(client, BatchOcrOptions(force_reprocess=True))

        controller.start([make_document("a", has_submitted_at=True)])

        assert client.calls == ["a"]

    def test_explicit_flag_overrides_options(self, make_document):
        client = _ScriptedClient()
        controller = BatchOcrController(client, BatchOcrOptions(force_reprocess=True))

        controller.start([make_document("a", has_submitted_at=True)], force_reprocess_all=False)

        assert client.calls == []

    def test_batch_with_only_failures_still_completes(self, make_document):
        client = _ScriptedClient(default=ExtractionFailed(reason="HTTP 400"))
        controller = BatchOcrController(client)

        result = controller.start([make_document(f"doc-{i}") for i in range(4)])

        assert result.started is True
        assert controller.progress.error == controller.progress.total == 4


class TestConcurrency:
    def test_at_most_max_concurrent_tasks_processing(self, make_document):
        controller_ref = {}
        observed = []
        lock = threading.Lock()

        def observe(_document_id):
            snapshot = controller_ref["controller"].snapshot()
            with lock:
                observed.append(sum(1 for task in snapshot.tasks if task.state == TaskState.PROCESSING))
            time.sleep(0.02)

        client = _ScriptedClient(on_call=observe)
        controller = BatchOcrController(client, BatchOcrOptions(max_concurrent=2))
        controller_ref["controller"] = controller

        controller.start([make_document(f"doc-{i}") for i in range(10)])

        assert len(observed) == 10
        assert max(observed) <= 2
        assert controller.progress.completed == 10


class TestCancellation:
    def test_cancel_before_any_claim_skips_everything(self, make_document):
        client = _ScriptedClient()
        executor = _ManualExecutor()
        controller = BatchOcrController(client, executor=executor)

        result = controller.launch([make_document(f"doc-{i}") for i in range(4)])
        assert result.started is True
        assert controller.cancel() is True
        executor.run_pending()
        result.future.result()

        assert client.calls == []
        tasks = controller.tasks
        assert all(task.state == TaskState.SKIPPED for task in tasks)
        assert all(task.error == "cancelled" for task in tasks)
        assert controller.progress.completed == 4
        assert controller.progress.error == 0
        assert not controller.is_running

    def test_cancel_mid_run_leaves_nothing_pending(self, make_document):
        controller_ref = {}

        def cancel_on_first_call(_document_id):
            controller_ref["controller"].cancel()

        client = _ScriptedClient(on_call=cancel_on_first_call)
        controller = BatchOcrController(client, BatchOcrOptions(max_concurrent=1))
        controller_ref["controller"] = controller

        controller.start([make_document(f"doc-{i}") for i in range(5)])

        assert client.calls == ["doc-0"]
        tasks = controller.tasks
        assert all(task.state == TaskState.SKIPPED for task in tasks)
        assert controller.progress.completed == 5
        assert controller.progress.success == 0

    def test_cancel_when_idle_is_a_no_op(self):
        controller = BatchOcrController(_ScriptedClient())
        assert controller.cancel() is False

    def test_cancel_right_after_claim_targets_the_new_run(self, make_document):
        client = _ScriptedClient()
        executor = _ManualExecutor()
        controller = BatchOcrController(client, executor=executor)
        controller.start([make_document("first")])
        cancel_results = []

        result = controller.launch(
            [make_document("a"), make_document("b")],
            on_begin=lambda: cancel_results.append(controller.cancel()),
        )
        executor.run_pending()
        result.future.result()

        assert cancel_results == [True]
        assert client.calls == ["first"]
        assert all(task.state == TaskState.SKIPPED for task in controller.tasks)


class TestSingleActiveRun:
    def test_second_start_is_rejected_while_running(self, make_document):
        executor = _ManualExecutor()
        controller = BatchOcrController(_ScriptedClient(), executor=executor)

        controller.launch([make_document("a")])

        assert controller.is_running
        with pytest.raises(BatchRunActiveError):
            controller.start([make_document("b")])
        with pytest.raises(BatchRunActiveError):
            controller.reset()

        executor.run_pending()
        assert not controller.is_running

    def test_rejected_start_never_runs_on_begin(self, make_document):
        executor = _ManualExecutor()
        controller = BatchOcrController(_ScriptedClient(), executor=executor)
        begun = []

        controller.launch([make_document("a")], on_begin=lambda: begun.append("a"))
        with pytest.raises(BatchRunActiveError):
            controller.launch([make_document("b")], on_begin=lambda: begun.append("b"))

        assert begun == ["a"]

    def test_failing_on_begin_releases_the_run(self, make_document):
        client = _ScriptedClient()
        controller = BatchOcrController(client, executor=_ManualExecutor())

        def fail():
            raise RuntimeError("session store unavailable")

        with pytest.raises(RuntimeError):
            controller.launch([make_document("a")], on_begin=fail)

        assert not controller.is_running
        assert client.calls == []

    def test_reset_clears_finished_run(self, make_document):
        controller = BatchOcrController(_ScriptedClient())
        controller.start([make_document("a"), make_document("b", has_issued_at=True)])

        controller.reset()

        assert controller.tasks == ()
        assert controller.progress.total == 0
        assert controller.progress.skipped == 0


def test_mixed_success_404_and_network_failure(make_document):
    """Real HTTP client against a scripted transport: one success, two failures."""

    def post(url, json, headers, timeout):
        document_id = json["documentId"]
        if document_id == "ok":
            return _response(200, {"extractedDates": [{"date": "2024-05-02", "type": "submission"}]})
        if document_id == "missing":
            return _response(404, {"error": "Document not found"})
        raise requests.ConnectionError("connection refused")

    def session_factory():
        session = Mock()
        session.post.side_effect = post
        return session

    client = OcrExtractionClient(
        StaticSessionProvider("token"),
        endpoint="https://example.test/functions/v1/ocr-extract-dates",
        session_factory=session_factory,
        sleep=lambda seconds, cancellation: None,
    )
    controller = BatchOcrController(client)

    controller.start([make_document("ok"), make_document("missing"), make_document("offline")])

    progress = controller.progress
    assert progress.success == 1
    assert progress.error == 2
    by_id = {task.document_id: task for task in controller.tasks}
    assert by_id["ok"].extracted_dates.submitted_at == "2024-05-02"
    assert by_id["missing"].error == "Document not found"
    assert by_id["offline"].error == "connection refused"
