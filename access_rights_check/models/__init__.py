"""Data models for the access rights check."""

from .extract import ExtractionStatus, FieldExtraction
from .ids import DETAIL_SEGMENT, InvalidReference, extract_record_identifier
from .verdict import Verdict

__all__ = [
    "DETAIL_SEGMENT",
    "ExtractionStatus",
    "FieldExtraction",
    "InvalidReference",
    "Verdict",
    "extract_record_identifier",
]
