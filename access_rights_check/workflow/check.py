"""Check a catalogue record for an approved Access Rights term."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from access_rights_check.clients.http import DocumentFetcher, TransportError
from access_rights_check.config import Settings
from access_rights_check.extractors.ddi import (
    ACCESS_RIGHTS_PATH,
    MalformedInput,
    MissingRoot,
    extract_field,
    isolate_root,
)
from access_rights_check.models import (
    ExtractionStatus,
    FieldExtraction,
    Verdict,
    extract_record_identifier,
)
from access_rights_check.services.verdict import decide
from access_rights_check.services.vocabulary import VocabularyCache

logger = logging.getLogger(__name__)

_shared_vocabulary: Optional[VocabularyCache] = None
_shared_vocabulary_lock = threading.Lock()


class AccessRightsChecker:
    """Run the record check pipeline with an injectable fetcher and cache.

    The vocabulary cache lives as long as the checker, so one checker reused
    for many records fetches the vocabulary at most once.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        fetcher: Optional[DocumentFetcher] = None,
        vocabulary: Optional[VocabularyCache] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.fetcher = fetcher or DocumentFetcher(self.settings)
        self.vocabulary = vocabulary or VocabularyCache(self.fetcher, self.settings)

    def check_record(self, reference: str) -> Verdict:
        """
        Check whether a record declares an approved Access Rights term.

        Parameters
        ----------
        reference : str
            Catalogue detail URL, e.g.
            ``https://datacatalogue.cessda.eu/detail/abc123?lang=en``

        Returns
        -------
        Verdict
            ``PASS``, ``FAIL`` or ``INDETERMINATE``.

        Raises
        ------
        InvalidReference
            If the URL does not identify a record. Nothing is fetched.
        """
        identifier = extract_record_identifier(reference)
        log_extra = {"record_id": identifier}
        extraction = self.fetch_access_rights(identifier)

        if extraction.status is ExtractionStatus.TRANSPORT_FAILED:
            logger.error(
                "Could not retrieve record %s: %s",
                identifier,
                extraction.error_message,
                extra=log_extra,
            )
            return Verdict.INDETERMINATE
        if extraction.status is ExtractionStatus.PARSE_FAILED:
            logger.error(
                "Could not parse record %s: %s",
                identifier,
                extraction.error_message,
                extra=log_extra,
            )
            return Verdict.INDETERMINATE
        if extraction.status is ExtractionStatus.ROOT_MISSING:
            logger.error(
                "Record %s has no DDI codebook: %s",
                identifier,
                extraction.error_message,
                extra=log_extra,
            )
            return Verdict.INDETERMINATE

        if not extraction.values:
            logger.info(
                "No Access Rights element found for record: %s", identifier, extra=log_extra
            )

        verdict = decide(extraction.values, self.vocabulary.approved_terms())
        if verdict is Verdict.FAIL and extraction.values:
            logger.info(
                "No approved Access Rights found in record: %s", identifier, extra=log_extra
            )
        logger.info(
            "Result for record %s: %s", identifier, verdict.value, extra=log_extra
        )
        return verdict

    def fetch_access_rights(self, identifier: str) -> FieldExtraction:
        """Fetch a record and return its Access Rights values as a tagged result."""
        try:
            payload = self.fetcher.fetch_metadata(identifier)
        except TransportError as exc:
            return FieldExtraction.failed(ExtractionStatus.TRANSPORT_FAILED, str(exc))

        try:
            document = isolate_root(
                payload,
                namespace=self.settings.ddi_namespace,
                preview_bytes=self.settings.preview_bytes,
            )
        except MalformedInput as exc:
            return FieldExtraction.failed(ExtractionStatus.PARSE_FAILED, str(exc))
        except MissingRoot as exc:
            return FieldExtraction.failed(ExtractionStatus.ROOT_MISSING, str(exc))

        values = extract_field(
            document, ACCESS_RIGHTS_PATH, namespace=self.settings.ddi_namespace
        )
        return FieldExtraction.ok(values)

    def close(self) -> None:
        self.fetcher.close()


def shared_vocabulary(settings: Optional[Settings] = None) -> VocabularyCache:
    """Return the process-wide vocabulary cache, creating it on first use.

    The cache keeps the settings of the call that created it.
    """
    global _shared_vocabulary
    if _shared_vocabulary is not None:
        return _shared_vocabulary
    with _shared_vocabulary_lock:
        if _shared_vocabulary is None:
            resolved = settings or Settings()
            _shared_vocabulary = VocabularyCache(DocumentFetcher(resolved), resolved)
        return _shared_vocabulary


def check_record(reference: str, settings: Optional[Settings] = None) -> Verdict:
    """Run a single check, reusing the process-wide vocabulary cache."""
    checker = AccessRightsChecker(settings, vocabulary=shared_vocabulary(settings))
    try:
        return checker.check_record(reference)
    finally:
        checker.close()


__all__ = ["AccessRightsChecker", "check_record", "shared_vocabulary"]
