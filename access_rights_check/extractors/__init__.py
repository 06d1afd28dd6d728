"""Field extraction from structured metadata records."""

from .ddi import (
    ACCESS_RIGHTS_PATH,
    DDI_NAMESPACE,
    MalformedInput,
    MissingRoot,
    extract_field,
    isolate_root,
)

__all__ = [
    "ACCESS_RIGHTS_PATH",
    "DDI_NAMESPACE",
    "MalformedInput",
    "MissingRoot",
    "extract_field",
    "isolate_root",
]
