"""OCR text routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from pvdocs.api.schemas import ExtractDatesRequestSchema, ExtractDatesResponseSchema
from pvdocs.api.v1.dependencies import get_extract_dates_handler
from pvdocs.application.queries.extract_document_dates import (
    ExtractDocumentDatesHandler,
    ExtractDocumentDatesQuery,
)

router = APIRouter(prefix="/ocr", tags=["ocr"])


@router.post("/extract-dates", response_model=ExtractDatesResponseSchema)
def extract_dates(
    payload: ExtractDatesRequestSchema,
    handler: ExtractDocumentDatesHandler = Depends(get_extract_dates_handler),
) -> ExtractDatesResponseSchema:
    dto = handler.handle(ExtractDocumentDatesQuery(text=payload.text))
    return ExtractDatesResponseSchema.model_validate(
        {"extractedDates": dto.candidates, "best": dto.best}
    )
