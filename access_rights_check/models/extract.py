"""Outcome of pulling the access rights field out of a metadata record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional


class ExtractionStatus(str, Enum):
    """Enumeration of the ways a field extraction can end."""

    OK = "ok"
    TRANSPORT_FAILED = "transport_failed"
    PARSE_FAILED = "parse_failed"
    ROOT_MISSING = "root_missing"


@dataclass
class FieldExtraction:
    """Field values for one record, or the reason they could not be read."""

    status: ExtractionStatus
    values: List[str] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is ExtractionStatus.OK

    @classmethod
    def ok(cls, values: Iterable[str]) -> "FieldExtraction":
        return cls(status=ExtractionStatus.OK, values=list(values))

    @classmethod
    def failed(cls, status: ExtractionStatus, message: str) -> "FieldExtraction":
        if status is ExtractionStatus.OK:
            raise ValueError("A failed extraction needs a failure status")
        return cls(status=status, error_message=message)


__all__ = ["ExtractionStatus", "FieldExtraction"]
