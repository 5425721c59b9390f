"""CandidateDocument - document metadata offered to a batch OCR run."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pvdocs.domain.value_objects.extracted_dates import ExistingExtraction


@dataclass(frozen=True)
class CandidateDocument:
    """
    Read-only view of a stored document, as supplied by the document store.

    The ``has_*`` flags say whether the store already holds a value; the
    optional value fields carry that value when the caller has it.
    """

    id: str
    title: str = ""
    project_code: str = ""
    project_id: Optional[str] = None
    doc_type_code: Optional[str] = None
    has_drive_file: bool = False
    has_submitted_at: bool = False
    has_issued_at: bool = False
    has_pv_id: bool = False
    submitted_at: Optional[str] = None
    issued_at: Optional[str] = None
    pv_id: Optional[str] = None

    @property
    def has_extracted_data(self) -> bool:
        """True when OCR output (or a manual entry) is already stored."""
        return self.has_submitted_at or self.has_issued_at or self.has_pv_id

    def existing_extraction(self) -> ExistingExtraction:
        return ExistingExtraction(
            submitted_at=self.submitted_at,
            issued_at=self.issued_at,
            pv_id=self.pv_id,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateDocument":
        """Build from a camelCase or snake_case mapping."""

        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        return cls(
            id=str(pick("id", "documentId", "document_id", default="")),
            title=pick("title", default="") or "",
            project_code=pick("projectCode", "project_code", default="") or "",
            project_id=pick("projectId", "project_id"),
            doc_type_code=pick("docTypeCode", "doc_type_code"),
            has_drive_file=bool(pick("hasDriveFile", "has_drive_file", default=False)),
            has_submitted_at=bool(pick("hasSubmittedAt", "has_submitted_at", default=False)),
            has_issued_at=bool(pick("hasIssuedAt", "has_issued_at", default=False)),
            has_pv_id=bool(pick("hasPvId", "has_pv_id", default=False)),
            submitted_at=pick("submittedAt", "submitted_at"),
            issued_at=pick("issuedAt", "issued_at"),
            pv_id=pick("pvId", "pv_id"),
        )
