"""HTTP clients used by the access rights check."""

from .http import JSON_ACCEPT, XML_ACCEPT, DocumentFetcher, TransportError

__all__ = ["DocumentFetcher", "JSON_ACCEPT", "TransportError", "XML_ACCEPT"]
