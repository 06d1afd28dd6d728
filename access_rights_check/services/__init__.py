"""Services shared by the access rights workflow."""

from .verdict import decide
from .vocabulary import (
    DEFAULT_ACCESS_TERMS,
    VocabularyCache,
    VocabularySource,
    VocabularyUnavailable,
    parse_vocabulary,
)

__all__ = [
    "DEFAULT_ACCESS_TERMS",
    "VocabularyCache",
    "VocabularySource",
    "VocabularyUnavailable",
    "decide",
    "parse_vocabulary",
]
