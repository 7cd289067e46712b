"""
Loading of OpenAPI/Swagger documents.

A document is read from a local path or fetched from an ``http(s)`` URL and
parsed with PyYAML; JSON documents parse the same way since JSON is a subset
of YAML.
"""

from pathlib import Path
from typing import Any, Final

import requests
import yaml

BAD_DOCUMENT_MESSAGE: Final = "Something about your document doesn't seem right. It can't be processed."

_REMOTE_SCHEMES: Final = ("http://", "https://")
_FETCH_TIMEOUT_SECONDS: Final = 30.0


class DocumentLoadError(ValueError):
    """The source text does not parse into a usable document."""


def is_remote(location: str | Path) -> bool:
    """Check whether a document location is a URL."""
    return str(location).startswith(_REMOTE_SCHEMES)


def read_source(location: str | Path) -> str:
    """Read the raw text of a document.

    Args:
        location: A filesystem path or an ``http(s)`` URL.

    Returns:
        The document text.

    Raises:
        FileNotFoundError: If a local path does not exist.
        requests.RequestException: If a URL cannot be fetched or answers with an error status.
    """
    if is_remote(location):
        response = requests.get(str(location), timeout=_FETCH_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text

    return Path(location).read_text(encoding="utf-8")


def parse_document_text(text: str) -> dict[str, Any]:
    """Parse document text into a document tree.

    Args:
        text: YAML or JSON text.

    Returns:
        The document as nested mappings.

    Raises:
        DocumentLoadError: If the text is not valid YAML/JSON or is not a
            non-empty mapping.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"{BAD_DOCUMENT_MESSAGE} {e}"
        raise DocumentLoadError(msg) from e

    if not document or not isinstance(document, dict):
        raise DocumentLoadError(BAD_DOCUMENT_MESSAGE)

    return document


def load_document(location: str | Path) -> dict[str, Any]:
    """Read and parse the document at ``location``."""
    return parse_document_text(read_source(location))
