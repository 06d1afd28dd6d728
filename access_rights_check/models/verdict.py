"""Verdict tokens reported by the access rights check."""

from __future__ import annotations

from enum import Enum


class Verdict(str, Enum):
    """Tri-state outcome of a single record check."""

    PASS = "pass"
    FAIL = "fail"
    INDETERMINATE = "indeterminate"

    def __str__(self) -> str:
        return self.value


__all__ = ["Verdict"]
