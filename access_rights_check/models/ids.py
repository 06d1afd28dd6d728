"""Record identifiers derived from catalogue detail URLs."""

from __future__ import annotations

DETAIL_SEGMENT = "/detail/"


class InvalidReference(ValueError):
    """Raised when a detail URL does not name a catalogue record."""


def extract_record_identifier(reference: str) -> str:
    """Return the record identifier embedded in a catalogue detail URL.

    The query string is ignored, so ``.../detail/abc?lang=en`` and
    ``.../detail/abc`` both yield ``abc``.

    Parameters
    ----------
    reference : str
        Catalogue detail URL, e.g.
        ``https://datacatalogue.cessda.eu/detail/abc123?lang=en``

    Returns
    -------
    str
        The record identifier.

    Raises
    ------
    InvalidReference
        If the URL has no ``/detail/`` segment or nothing follows it.
    """
    clean_url = reference.split("?", 1)[0]
    marker = clean_url.find(DETAIL_SEGMENT)
    if marker == -1:
        raise InvalidReference(f"URL must contain '{DETAIL_SEGMENT}': {reference}")

    identifier = clean_url[marker + len(DETAIL_SEGMENT) :]
    if not identifier:
        raise InvalidReference(f"No record identifier in URL: {reference}")
    return identifier


__all__ = ["DETAIL_SEGMENT", "InvalidReference", "extract_record_identifier"]
