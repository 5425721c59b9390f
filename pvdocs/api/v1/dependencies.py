"""Shared FastAPI dependencies for v1 API routers.

These factories centralize construction of the batch OCR controller, its OCR
client and the command/query handlers so routers can depend on simple
callables. Tests swap any of them through ``app.dependency_overrides``.
"""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from pvdocs.application.commands.cancel_batch_ocr import CancelBatchOcrHandler
from pvdocs.application.commands.reset_batch_ocr import ResetBatchOcrHandler
from pvdocs.application.commands.start_batch_ocr import StartBatchOcrHandler
from pvdocs.application.queries.extract_document_dates import ExtractDocumentDatesHandler
from pvdocs.application.queries.get_batch_ocr_status import GetBatchOcrStatusHandler
from pvdocs.application.runner.controller import BatchOcrController
from pvdocs.config import get_settings
from pvdocs.domain.value_objects.batch_options import BatchOcrOptions
from pvdocs.infrastructure.auth.session_provider import SessionStore
from pvdocs.infrastructure.ocr.ocr_extraction_client import OcrExtractionClient


@lru_cache()
def _batch_options() -> BatchOcrOptions:
    return BatchOcrOptions.from_settings(get_settings())


@lru_cache()
def _session_store() -> SessionStore:
    return SessionStore(get_settings().ocr_access_token)


def get_session_store() -> SessionStore:
    """Provide the process-wide session store."""
    return _session_store()


@lru_cache()
def _batch_controller() -> BatchOcrController:
    options = _batch_options()
    client = OcrExtractionClient(_session_store(), options=options)
    return BatchOcrController(client, options)


def get_batch_controller() -> BatchOcrController:
    """Provide the singleton batch OCR controller."""
    return _batch_controller()


def get_start_batch_handler(
    controller: BatchOcrController = Depends(get_batch_controller),
    session_store: SessionStore = Depends(get_session_store),
) -> StartBatchOcrHandler:
    """Provide a StartBatchOcr handler bound to the singleton controller."""
    return StartBatchOcrHandler(
        controller,
        session_store,
        default_access_token=get_settings().ocr_access_token,
    )


def get_cancel_batch_handler(
    controller: BatchOcrController = Depends(get_batch_controller),
) -> CancelBatchOcrHandler:
    """Provide a CancelBatchOcr handler bound to the singleton controller."""
    return CancelBatchOcrHandler(controller)


def get_reset_batch_handler(
    controller: BatchOcrController = Depends(get_batch_controller),
) -> ResetBatchOcrHandler:
    """Provide a ResetBatchOcr handler bound to the singleton controller."""
    return ResetBatchOcrHandler(controller)


def get_batch_status_handler(
    controller: BatchOcrController = Depends(get_batch_controller),
) -> GetBatchOcrStatusHandler:
    """Provide a GetBatchOcrStatus handler bound to the singleton controller."""
    return GetBatchOcrStatusHandler(controller)


@lru_cache()
def _extract_dates_handler() -> ExtractDocumentDatesHandler:
    return ExtractDocumentDatesHandler()


def get_extract_dates_handler() -> ExtractDocumentDatesHandler:
    """Provide a cached ExtractDocumentDates handler."""
    return _extract_dates_handler()


def close_batch_controller() -> None:
    """Shut down the singleton controller's executor if it was ever built."""
    if _batch_controller.cache_info().currsize:
        _batch_controller().close()
        _batch_controller.cache_clear()
