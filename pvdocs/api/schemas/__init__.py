"""
API Schemas - organized by domain
"""
from .common_schemas import DateCandidateSchema, ExtractedDatesSchema
from .batch_schemas import (
    BatchProgressSchema,
    BatchStatusSchema,
    CancelBatchResponseSchema,
    CandidateDocumentSchema,
    ExistingDataSchema,
    ExtractDatesRequestSchema,
    ExtractDatesResponseSchema,
    OcrTaskSchema,
    StartBatchRequestSchema,
    StartBatchResponseSchema,
)

__all__ = [
    # Common
    "DateCandidateSchema",
    "ExtractedDatesSchema",
    # Batch OCR schemas
    "BatchProgressSchema",
    "BatchStatusSchema",
    "CancelBatchResponseSchema",
    "CandidateDocumentSchema",
    "ExistingDataSchema",
    "OcrTaskSchema",
    "StartBatchRequestSchema",
    "StartBatchResponseSchema",
    # OCR text schemas
    "ExtractDatesRequestSchema",
    "ExtractDatesResponseSchema",
]
