"""Batch OCR routes: start, cancel, reset and poll a batch run."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from pvdocs.api.schemas import (
    BatchStatusSchema,
    CancelBatchResponseSchema,
    StartBatchRequestSchema,
    StartBatchResponseSchema,
)
from pvdocs.api.v1.dependencies import (
    get_batch_status_handler,
    get_cancel_batch_handler,
    get_reset_batch_handler,
    get_start_batch_handler,
)
from pvdocs.application.commands.cancel_batch_ocr import CancelBatchOcrCommand, CancelBatchOcrHandler
from pvdocs.application.commands.reset_batch_ocr import ResetBatchOcrCommand, ResetBatchOcrHandler
from pvdocs.application.commands.start_batch_ocr import StartBatchOcrCommand, StartBatchOcrHandler
from pvdocs.application.queries.get_batch_ocr_status import (
    GetBatchOcrStatusHandler,
    GetBatchOcrStatusQuery,
)
from pvdocs.domain.exceptions import BatchRunActiveError, DomainValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/batch-ocr", tags=["batch-ocr"])


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.post("/runs", response_model=StartBatchResponseSchema, status_code=status.HTTP_202_ACCEPTED)
def start_batch(
    payload: StartBatchRequestSchema,
    response: Response,
    authorization: Optional[str] = Header(default=None),
    handler: StartBatchOcrHandler = Depends(get_start_batch_handler),
) -> StartBatchResponseSchema:
    command = StartBatchOcrCommand(
        documents=tuple(document.to_domain() for document in payload.documents),
        force_reprocess_all=payload.forceReprocessAll,
        access_token=_bearer_token(authorization),
    )
    try:
        dto = handler.handle(command)
    except BatchRunActiveError as exc:
        logger.info("Rejected batch OCR start: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except DomainValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if not dto.started:
        response.status_code = status.HTTP_200_OK
    return StartBatchResponseSchema.model_validate(dto.to_dict())


@router.post("/cancel", response_model=CancelBatchResponseSchema)
def cancel_batch(
    handler: CancelBatchOcrHandler = Depends(get_cancel_batch_handler),
) -> CancelBatchResponseSchema:
    return CancelBatchResponseSchema.model_validate(handler.handle(CancelBatchOcrCommand()))


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_batch(
    handler: ResetBatchOcrHandler = Depends(get_reset_batch_handler),
) -> Response:
    try:
        handler.handle(ResetBatchOcrCommand())
    except BatchRunActiveError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/status", response_model=BatchStatusSchema)
def get_batch_status(
    handler: GetBatchOcrStatusHandler = Depends(get_batch_status_handler),
) -> BatchStatusSchema:
    dto = handler.handle(GetBatchOcrStatusQuery())
    return BatchStatusSchema.model_validate(dto.to_dict())
