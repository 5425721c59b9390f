"""HTTP client for the OCR date-extraction edge function, with retry and backoff."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests

from pvdocs.application.runner.cancellation import CancellationToken
from pvdocs.config import get_settings
from pvdocs.constants import (
    BACKOFF_BASE_SECONDS,
    MESSAGE_NOT_AUTHENTICATED,
    MESSAGE_RETRY_LIMIT,
    TRANSIENT_STATUS_CODES,
)
from pvdocs.domain.value_objects.batch_options import BatchOcrOptions
from pvdocs.domain.value_objects.extraction_outcome import (
    ExtractionCancelled,
    ExtractionFailed,
    ExtractionOutcome,
)
from pvdocs.infrastructure.auth.session_provider import SessionProvider

from .response_mapper import extraction_error_message, map_extraction_response

logger = logging.getLogger(__name__)

Sleeper = Callable[[float, CancellationToken], Any]


def backoff_delay(attempt: int) -> int:
    """Seconds to wait after failed attempt ``attempt`` (1-based): 2, 4, 8, ..."""
    return BACKOFF_BASE_SECONDS ** attempt


def _wait_for_cancellation(seconds: float, cancellation: CancellationToken) -> None:
    cancellation.wait(seconds)


class OcrExtractionClient:
    """Calls the OCR service for one document at a time."""

    def __init__(
        self,
        session_provider: SessionProvider,
        *,
        endpoint: Optional[str] = None,
        options: Optional[BatchOcrOptions] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        if endpoint is None:
            endpoint = get_settings().ensure_ocr_endpoint()
        if not endpoint:
            raise RuntimeError("SUPABASE_URL or OCR_FUNCTION_URL must be configured before using the OCR client")

        self._endpoint = endpoint
        self._sessions = session_provider
        self._options = options or BatchOcrOptions()
        self._session_factory = session_factory
        self._sleep = sleep or _wait_for_cancellation

    @property
    def endpoint(self) -> str:
        return self._endpoint

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def extract(
        self,
        document_id: str,
        doc_type_code: Optional[str],
        cancellation: CancellationToken,
    ) -> ExtractionOutcome:
        """
        Run OCR for ``document_id`` with up to ``max_attempts`` attempts.

        502/503/504 responses and transport exceptions are retried after
        ``2 ** attempt`` seconds. Other failures return immediately. The
        outcome is a value; this method does not raise for remote errors.
        """
        max_attempts = self._options.max_attempts

        for attempt in range(1, max_attempts + 1):
            if cancellation.is_cancelled:
                return ExtractionCancelled()

            access_token = self._sessions.get_access_token()
            if not access_token:
                return ExtractionFailed(reason=MESSAGE_NOT_AUTHENTICATED)

            has_retry = attempt < max_attempts
            try:
                response = self._post(document_id, doc_type_code, access_token, cancellation)
            except requests.RequestException as exc:
                if cancellation.is_cancelled:
                    return ExtractionCancelled()
                if has_retry:
                    logger.warning(
                        "OCR request failed, retrying: %s",
                        exc,
                        extra={"document_id": document_id, "attempt": attempt},
                    )
                    self._backoff(attempt, cancellation)
                    continue
                logger.error(
                    "OCR request failed after %s attempts: %s",
                    attempt,
                    exc,
                    extra={"document_id": document_id},
                )
                return ExtractionFailed(reason=str(exc) or type(exc).__name__)

            if cancellation.is_cancelled:
                return ExtractionCancelled()

            status_code = response.status_code
            if status_code in TRANSIENT_STATUS_CODES and has_retry:
                logger.warning(
                    "OCR service returned %s, retrying",
                    status_code,
                    extra={"document_id": document_id, "attempt": attempt},
                )
                self._backoff(attempt, cancellation)
                continue

            if not 200 <= status_code < 300:
                message = extraction_error_message(status_code, self._json_or_none(response))
                logger.warning(
                    "OCR failed: %s",
                    message,
                    extra={"document_id": document_id, "status_code": status_code},
                )
                return ExtractionFailed(reason=message)

            try:
                payload = response.json()
            except ValueError as exc:
                return ExtractionFailed(reason=f"Invalid OCR response: {exc}")

            outcome = map_extraction_response(payload)
            logger.info(
                "OCR succeeded",
                extra={
                    "document_id": document_id,
                    "attempt": attempt,
                    "found_nothing": outcome.found_nothing,
                },
            )
            return outcome

        return ExtractionFailed(reason=MESSAGE_RETRY_LIMIT)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _post(
        self,
        document_id: str,
        doc_type_code: Optional[str],
        access_token: str,
        cancellation: CancellationToken,
    ) -> requests.Response:
        body = {
            "documentId": document_id,
            "maxPages": self._options.max_pages,
            "autoUpdate": self._options.auto_update,
        }
        if doc_type_code:
            body["docTypeCode"] = doc_type_code
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

        # One session per attempt so cancellation can close it under an in-flight request.
        session = self._session_factory()
        unregister = cancellation.register(session.close)
        try:
            return session.post(
                self._endpoint,
                json=body,
                headers=headers,
                timeout=self._options.request_timeout,
            )
        finally:
            unregister()
            session.close()

    def _backoff(self, attempt: int, cancellation: CancellationToken) -> None:
        self._sleep(backoff_delay(attempt), cancellation)

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None
