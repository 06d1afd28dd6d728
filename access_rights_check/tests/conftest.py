from __future__ import annotations

import json
import textwrap
from typing import Callable, Dict, List, Optional

import pytest
import requests

from access_rights_check.clients.http import DocumentFetcher, TransportError
from access_rights_check.config import Settings

DETAIL_URL = "https://datacatalogue.cessda.eu/detail/abc123?lang=en"


def oai_record(*access_values: str) -> bytes:
    """Wrap ``typeOfAccess`` values in an OAI-PMH GetRecord response."""
    elements = "\n".join(
        f"                <typeOfAccess>{value}</typeOfAccess>" for value in access_values
    )
    xml = textwrap.dedent(
        """\
        <?xml version="1.0" encoding="UTF-8"?>
        <OAI-PMH xmlns="http://www.openarchives.org/OAI/2.0/">
          <GetRecord>
            <record>
              <metadata>
                <codeBook xmlns="ddi:codebook:2_5" version="2.5">
                  <stdyDscr>
                    <dataAccs>
        {elements}
                    </dataAccs>
                  </stdyDscr>
                </codeBook>
              </metadata>
            </record>
          </GetRecord>
        </OAI-PMH>
        """
    )
    return xml.replace("{elements}", elements).encode("utf-8")


def vocabulary_payload(*titles: object) -> bytes:
    return json.dumps(
        {"versions": [{"concepts": [{"title": title} for title in titles]}]}
    ).encode("utf-8")


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Stand-in for ``requests.Session`` that records every GET."""

    def __init__(self, responses: Optional[List[object]] = None) -> None:
        self.responses = list(responses or [])
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, object]] = []
        self.closed = False

    def get(self, url: str, **kwargs: object) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response  # type: ignore[return-value]

    def close(self) -> None:
        self.closed = True


class FakeFetcher(DocumentFetcher):
    """Document fetcher serving canned metadata and vocabulary payloads."""

    def __init__(
        self,
        *,
        metadata: object = None,
        vocabulary: object = None,
        settings: Optional[Settings] = None,
        on_vocabulary: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(settings or Settings(), session=FakeSession())
        self.metadata = metadata
        self.vocabulary = vocabulary
        self.on_vocabulary = on_vocabulary
        self.metadata_calls: List[str] = []
        self.vocabulary_calls = 0

    @staticmethod
    def _serve(value: object) -> bytes:
        if isinstance(value, BaseException):
            raise value
        if value is None:
            raise TransportError("no canned payload")
        return value  # type: ignore[return-value]

    def fetch_metadata(self, identifier: str) -> bytes:
        self.metadata_calls.append(identifier)
        return self._serve(self.metadata)

    def fetch_vocabulary(self) -> bytes:
        self.vocabulary_calls += 1
        if self.on_vocabulary is not None:
            self.on_vocabulary()
        return self._serve(self.vocabulary)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def open_record() -> bytes:
    return oai_record("Open")


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


@pytest.fixture
def make_record() -> Callable[..., bytes]:
    return oai_record


@pytest.fixture
def make_vocabulary() -> Callable[..., bytes]:
    return vocabulary_payload


@pytest.fixture
def fake_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def fake_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def detail_url() -> str:
    return DETAIL_URL
