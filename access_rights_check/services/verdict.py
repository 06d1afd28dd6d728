"""Compare extracted field values against the approved vocabulary."""

from __future__ import annotations

import logging
from typing import AbstractSet, Sequence

from access_rights_check.models import Verdict

logger = logging.getLogger(__name__)


def decide(field_values: Sequence[str], approved_terms: AbstractSet[str]) -> Verdict:
    """Return ``PASS`` when any value is an approved term, else ``FAIL``.

    Matching is exact and case-sensitive; the first approved value in
    document order decides. Values are compared as given, so callers pass
    them already trimmed, as ``extract_field`` returns them.
    """
    if not field_values:
        return Verdict.FAIL

    for value in field_values:
        if value in approved_terms:
            logger.info("Match found: %s", value)
            return Verdict.PASS
    return Verdict.FAIL


__all__ = ["decide"]
