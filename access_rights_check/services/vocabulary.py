"""Process-lifetime cache of approved Access Rights terms.

The first caller that needs the vocabulary fetches it from the CESSDA
vocabulary service; every later caller gets the cached set without I/O.
When the service cannot be used the default terms are cached instead and the
service is not contacted again for the lifetime of the cache.
"""

from __future__ import annotations

import json
import logging
import threading
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Set

from access_rights_check.clients.http import DocumentFetcher
from access_rights_check.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TERMS: FrozenSet[str] = frozenset({"Open", "Restricted"})


class VocabularySource(str, Enum):
    """Where the cached term set came from."""

    REMOTE = "remote"
    DEFAULT = "default"


class VocabularyUnavailable(RuntimeError):
    """Raised internally when the vocabulary yields no usable terms."""


def parse_vocabulary(payload: bytes | str) -> Set[str]:
    """Collect concept titles from ``versions[0].concepts[*].title``.

    Blank titles are skipped and the rest are trimmed. Entries that do not
    have the expected shape contribute nothing.
    """
    document: Any = json.loads(payload)
    if not isinstance(document, dict):
        return set()
    versions = document.get("versions")
    if not isinstance(versions, list) or not versions:
        return set()
    first_version = versions[0]
    if not isinstance(first_version, dict):
        return set()
    concepts = first_version.get("concepts")
    if not isinstance(concepts, list):
        return set()

    terms: Set[str] = set()
    for concept in concepts:
        if not isinstance(concept, dict):
            continue
        title = concept.get("title")
        if isinstance(title, str) and title.strip():
            logger.info("Found Access Rights entry: %s", title.strip())
            terms.add(title.strip())
    return terms


class VocabularyCache:
    """Lazily populated, thread-safe set of approved Access Rights terms."""

    def __init__(
        self,
        fetcher: Optional[DocumentFetcher] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or (fetcher.settings if fetcher else Settings())
        self._fetcher = fetcher
        self._lock = threading.Lock()
        self._terms: Optional[FrozenSet[str]] = None
        self._source: Optional[VocabularySource] = None
        configured = frozenset(
            term.strip() for term in self.settings.default_access_terms if term.strip()
        )
        self._defaults = configured or DEFAULT_ACCESS_TERMS

    @classmethod
    def preloaded(
        cls,
        terms: Iterable[str],
        source: VocabularySource = VocabularySource.REMOTE,
    ) -> "VocabularyCache":
        """Build a cache that is already populated and never fetches."""
        cache = cls(settings=Settings())
        populated = frozenset(term.strip() for term in terms if term.strip())
        if not populated:
            raise ValueError("A preloaded vocabulary needs at least one term")
        cache._store(populated, source)
        return cache

    @property
    def is_populated(self) -> bool:
        return bool(self._terms)

    @property
    def source(self) -> Optional[VocabularySource]:
        return self._source

    def approved_terms(self) -> FrozenSet[str]:
        """Return the approved terms, fetching them on first use.

        Never raises for transport or parse problems; those resolve to the
        default terms.
        """
        terms = self._terms
        if terms:
            return terms

        with self._lock:
            if self._terms:
                return self._terms
            return self._populate()

    get_or_populate = approved_terms

    def _populate(self) -> FrozenSet[str]:
        logger.info("Fetching approved Access Rights terms from CESSDA vocabulary...")
        try:
            terms = self._fetch_remote()
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to fetch Access Rights vocabulary: %s", exc)
            logger.info("Using default Access Rights terms: %s", sorted(self._defaults))
            return self._store(self._defaults, VocabularySource.DEFAULT)

        populated = frozenset(terms)
        logger.info(
            "Fetched %d approved Access Rights terms: %s",
            len(populated),
            sorted(populated),
        )
        return self._store(populated, VocabularySource.REMOTE)

    def _fetch_remote(self) -> Set[str]:
        if self._fetcher is None:
            self._fetcher = DocumentFetcher(self.settings)
        terms = parse_vocabulary(self._fetcher.fetch_vocabulary())
        if not terms:
            raise VocabularyUnavailable(
                "No valid Access Rights terms found in vocabulary response"
            )
        return terms

    def _store(self, terms: FrozenSet[str], source: VocabularySource) -> FrozenSet[str]:
        self._source = source
        self._terms = terms
        return terms


__all__ = [
    "DEFAULT_ACCESS_TERMS",
    "VocabularyCache",
    "VocabularySource",
    "VocabularyUnavailable",
    "parse_vocabulary",
]
