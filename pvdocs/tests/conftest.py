"""Pytest configuration for pvdocs tests.

Ensures the project root is on sys.path so imports like ``pvdocs.*`` resolve
during test collection without an editable install, and provides shared
fixtures for the batch OCR tests.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add repository root to sys.path for module resolution.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pvdocs.domain.entities.candidate_document import CandidateDocument  # noqa: E402


@pytest.fixture
def make_document():
    """Factory for candidate documents with a cloud file and no extracted data."""

    def _make(doc_id: str, **overrides) -> CandidateDocument:
        values = {
            "id": doc_id,
            "title": f"Document {doc_id}",
            "project_code": "PV-2024-001",
            "project_id": "project-1",
            "has_drive_file": True,
        }
        values.update(overrides)
        return CandidateDocument(**values)

    return _make
