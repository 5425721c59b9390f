"""
Common schemas shared across different API endpoints
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ExtractedDatesSchema(BaseModel):
    submittedAt: Optional[str] = None
    issuedAt: Optional[str] = None
    meterDate: Optional[str] = None


class DateCandidateSchema(BaseModel):
    date: str
    type: str
    confidence: float
    context: str = ""
