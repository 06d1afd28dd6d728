"""Locate the DDI codebook in an OAI-PMH response and read fields from it."""

from __future__ import annotations

import copy
import logging
from typing import List, Optional

from lxml import etree

logger = logging.getLogger(__name__)

DDI_NAMESPACE = "ddi:codebook:2_5"
ROOT_PATH = "//ddi:codeBook"
ACCESS_RIGHTS_PATH = "/ddi:codeBook/ddi:stdyDscr/ddi:dataAccs/ddi:typeOfAccess"
PREVIEW_BYTES = 500


class MalformedInput(ValueError):
    """Raised when a payload cannot be parsed as XML."""


class MissingRoot(LookupError):
    """Raised when a parsed payload has no DDI codebook element."""


def _namespaces(namespace: Optional[str]) -> dict[str, str]:
    return {"ddi": namespace or DDI_NAMESPACE}


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def isolate_root(
    payload: bytes,
    *,
    namespace: Optional[str] = None,
    preview_bytes: int = PREVIEW_BYTES,
) -> etree._ElementTree:
    """
    Parse an OAI-PMH payload and return its DDI codebook as a standalone tree.

    The first ``ddi:codeBook`` element anywhere in the payload is deep-copied
    into a new tree so later lookups start from the codebook itself.

    Raises
    ------
    MalformedInput
        If the payload is not well-formed XML. A preview of the payload is
        logged; it is not included in the exception.
    MissingRoot
        If no codebook element is present.
    """
    try:
        parsed = etree.fromstring(payload, _parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        preview = payload[:preview_bytes].decode("utf-8", errors="replace")
        logger.error("Failed to parse XML. Preview: %s", preview)
        raise MalformedInput(f"Failed to parse XML response: {exc}") from exc

    matches = parsed.xpath(ROOT_PATH, namespaces=_namespaces(namespace))
    if not matches:
        raise MissingRoot("No DDI codeBook found")
    return etree.ElementTree(copy.deepcopy(matches[0]))


def extract_field(
    document: etree._ElementTree,
    path: str = ACCESS_RIGHTS_PATH,
    *,
    namespace: Optional[str] = None,
) -> List[str]:
    """Return the trimmed text of every element matching ``path``, in order."""
    nodes = document.xpath(path, namespaces=_namespaces(namespace))
    logger.info("Matched %d element(s) for %s", len(nodes), path)
    return ["".join(node.itertext()).strip() for node in nodes]


__all__ = [
    "ACCESS_RIGHTS_PATH",
    "DDI_NAMESPACE",
    "MalformedInput",
    "MissingRoot",
    "extract_field",
    "isolate_root",
]
