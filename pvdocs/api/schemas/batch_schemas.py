"""
Schemas for batch OCR endpoints
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from pvdocs.domain.entities.candidate_document import CandidateDocument

from .common_schemas import DateCandidateSchema, ExtractedDatesSchema


class CandidateDocumentSchema(BaseModel):
    id: str
    title: str = ""
    projectCode: str = ""
    projectId: Optional[str] = None
    docTypeCode: Optional[str] = None
    hasDriveFile: bool = False
    hasSubmittedAt: bool = False
    hasIssuedAt: bool = False
    hasPvId: bool = False
    submittedAt: Optional[str] = None
    issuedAt: Optional[str] = None
    pvId: Optional[str] = None

    def to_domain(self) -> CandidateDocument:
        return CandidateDocument.from_dict(self.model_dump())


class StartBatchRequestSchema(BaseModel):
    documents: List[CandidateDocumentSchema] = Field(default_factory=list)
    forceReprocessAll: Optional[bool] = None


class StartBatchResponseSchema(BaseModel):
    started: bool
    processed: int = 0
    alreadyProcessed: int = 0
    message: Optional[str] = None


class CancelBatchResponseSchema(BaseModel):
    cancelled: bool


class ExistingDataSchema(BaseModel):
    submittedAt: Optional[str] = None
    issuedAt: Optional[str] = None
    pvId: Optional[str] = None


class OcrTaskSchema(BaseModel):
    documentId: str
    documentTitle: str
    projectCode: str
    projectId: Optional[str] = None
    docTypeCode: Optional[str] = None
    status: str
    error: Optional[str] = None
    extractedDates: Optional[ExtractedDatesSchema] = None
    extractedPvId: Optional[str] = None
    alreadyProcessed: bool = False
    existingData: Optional[ExistingDataSchema] = None
    candidates: Optional[List[DateCandidateSchema]] = None


class BatchProgressSchema(BaseModel):
    total: int = 0
    completed: int = 0
    success: int = 0
    error: int = 0
    skipped: int = 0
    review: int = 0
    percent: int = 0


class BatchStatusSchema(BaseModel):
    isRunning: bool
    progress: BatchProgressSchema
    tasks: List[OcrTaskSchema] = Field(default_factory=list)


class ExtractDatesRequestSchema(BaseModel):
    text: str = ""


class ExtractDatesResponseSchema(BaseModel):
    extractedDates: List[DateCandidateSchema] = Field(default_factory=list)
    best: ExtractedDatesSchema
