"""pvdocs: document back end for solar project management (batch OCR)."""

__version__ = "0.1.0"
