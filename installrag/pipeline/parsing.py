"""
Installation Document Parser
============================

Validates raw installation content before any mapping work starts.

Checks, in order:
1. content present and readable          -> MISSING_SOURCE
2. content non-empty after trimming      -> EMPTY_INPUT
3. content parses as JSON                -> MALFORMED_INPUT
4. parsed root is a JSON object          -> INVALID_ROOT

A document that parses but carries no endpoints is not an error here:
the loader turns it into a fallback record (NO_USABLE_ENDPOINTS).

Expected input:
```json
{
    "metadata": {"name": "Villa", "revision": "2025.11", "major": 2, "minor": 5},
    "endpoints": [
        {"uuid": "e1", "name": "Kitchen PIR", "category": 18, "partitions": ["p1"]}
    ],
    "areas": [
        {"uuid": "a1", "name": "Kitchen", "partitions": ["p1"]}
    ]
}
```
"""

import json
from enum import Enum
from typing import Any, Dict, Optional, Union

import structlog
import tiktoken

from installrag.pipeline.diagnostics import Diagnostics, ensure_diagnostics

log = structlog.get_logger()

# Token counter - use cl100k_base
try:
    _tokenizer = tiktoken.get_encoding("cl100k_base")
except Exception:
    _tokenizer = None
    log.warning("tiktoken encoding not available, using word-based approximation for token counting")


def count_tokens(text: str) -> int:
    """
    Count tokens in text using tiktoken cl100k_base encoding.
    Falls back to a word-based approximation if the encoding is unavailable.
    """
    if not text:
        return 0

    if _tokenizer:
        return len(_tokenizer.encode(text))
    else:
        words = len(text.split())
        return int(words * 1.3)


class LoadErrorKind(Enum):
    """Reasons an installation document cannot be turned into a summary."""
    MISSING_SOURCE = "missing_source"
    EMPTY_INPUT = "empty_input"
    MALFORMED_INPUT = "malformed_input"
    INVALID_ROOT = "invalid_root"
    NO_USABLE_ENDPOINTS = "no_usable_endpoints"


_FATAL_KINDS = frozenset({
    LoadErrorKind.MISSING_SOURCE,
    LoadErrorKind.EMPTY_INPUT,
    LoadErrorKind.MALFORMED_INPUT,
    LoadErrorKind.INVALID_ROOT,
})


class LoadError(Exception):
    """
    Raised when an installation document cannot be loaded.

    Fatal kinds abort the load with no record. NO_USABLE_ENDPOINTS is
    never raised by the loader; it only labels the fallback record.
    """

    def __init__(self, kind: LoadErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def fatal(self) -> bool:
        return self.kind in _FATAL_KINDS

    def __repr__(self) -> str:
        return f"LoadError(kind={self.kind.value!r}, message={self.message!r})"


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_installation_document(
    content: Optional[Union[str, bytes]],
    diagnostics: Optional[Diagnostics] = None,
) -> Dict[str, Any]:
    """
    Parse and validate raw installation content.

    Args:
        content: Document text (bytes are decoded as UTF-8), or None when
                 the source could not be read
        diagnostics: Collector for errors and summary information

    Returns:
        The parsed document as a dict

    Raises:
        LoadError: MISSING_SOURCE, EMPTY_INPUT, MALFORMED_INPUT or INVALID_ROOT
    """
    diagnostics = ensure_diagnostics(diagnostics)

    if content is None:
        diagnostics.error("missing_source", "Document not found or not readable")
        raise LoadError(LoadErrorKind.MISSING_SOURCE, "Execution blocked: document does not exist")

    if isinstance(content, (bytes, bytearray)):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            diagnostics.error("missing_source", "Document is not readable as UTF-8", error=str(e))
            raise LoadError(LoadErrorKind.MISSING_SOURCE, "Execution blocked: document not readable") from e

    if not content.strip():
        diagnostics.error("empty_input", "Empty document")
        raise LoadError(LoadErrorKind.EMPTY_INPUT, "Execution blocked: document contents empty")

    try:
        document = json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        diagnostics.error("malformed_input", "JSON parsing failed", error=str(e), length=len(content))
        raise LoadError(LoadErrorKind.MALFORMED_INPUT, "Invalid JSON format in configuration") from e

    if not isinstance(document, dict):
        diagnostics.error("invalid_root", "Root is not an object", root_type=type(document).__name__)
        raise LoadError(LoadErrorKind.INVALID_ROOT, "Invalid JSON structure: root must be an object")

    return document


def has_usable_endpoints(document: Dict[str, Any]) -> bool:
    """True if the document carries a non-empty endpoints list."""
    endpoints = document.get("endpoints")
    return isinstance(endpoints, list) and len(endpoints) > 0


def has_areas(document: Dict[str, Any]) -> bool:
    """True if the document carries a non-empty areas list."""
    areas = document.get("areas")
    return isinstance(areas, list) and len(areas) > 0


__all__ = [
    "LoadError",
    "LoadErrorKind",
    "count_tokens",
    "has_areas",
    "has_usable_endpoints",
    "parse_installation_document",
]
