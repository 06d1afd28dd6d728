"""HTTP retrieval of catalogue records and vocabulary documents."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import requests

from access_rights_check.config import Settings

logger = logging.getLogger(__name__)

XML_ACCEPT = "application/xml, text/xml, */*"
JSON_ACCEPT = "application/json"


class TransportError(RuntimeError):
    """Raised when a remote document cannot be retrieved."""


class DocumentFetcher:
    """Fetch remote documents as raw bytes.

    A single ``requests.Session`` is reused across calls for connection
    pooling; nothing else is kept between requests. Requests are never
    retried.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.settings.user_agent})

    def fetch(self, url: str, *, timeout: float, accept: str = XML_ACCEPT) -> bytes:
        """
        Issue a single GET and return the response body.

        Parameters
        ----------
        url : str
            Document location; redirects are followed.
        timeout : float
            Read timeout in seconds. The connect timeout comes from settings.
            Both bound single socket operations, not the whole request, so a
            server that keeps trickling data can hold a request open longer.
        accept : str
            Value of the ``Accept`` header.

        Returns
        -------
        bytes
            Non-empty response body.

        Raises
        ------
        TransportError
            On network failure, a status other than 200, or an empty body.
        """
        try:
            response = self._session.get(
                url,
                headers={"Accept": accept},
                timeout=(self.settings.connect_timeout, timeout),
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if response.status_code != 200:
            raise TransportError(
                f"Failed to fetch document: HTTP {response.status_code} from {url}"
            )
        body = response.content
        if not body:
            raise TransportError(f"Empty response body from {url}")
        return body

    def metadata_url(self, identifier: str) -> str:
        return f"{self.settings.metadata_base_url}{quote(identifier, safe='')}"

    def fetch_metadata(self, identifier: str) -> bytes:
        """Fetch the OAI-PMH GetRecord response for a record identifier."""
        url = self.metadata_url(identifier)
        logger.info("Fetching metadata record from %s", url)
        return self.fetch(url, timeout=self.settings.metadata_timeout, accept=XML_ACCEPT)

    def fetch_vocabulary(self) -> bytes:
        """Fetch the Access Rights vocabulary JSON."""
        return self.fetch(
            self.settings.vocabulary_url,
            timeout=self.settings.vocabulary_timeout,
            accept=JSON_ACCEPT,
        )

    def close(self) -> None:
        self._session.close()


__all__ = ["DocumentFetcher", "JSON_ACCEPT", "TransportError", "XML_ACCEPT"]
