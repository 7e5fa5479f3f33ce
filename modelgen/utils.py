"""Loading of schema documents.

The introspection step writes one JSON document per database. It can reach
the generator as a file, from an HTTP endpoint serving it, or piped through
standard input; every loader returns ``(source, document)`` so the CLI can
say where the tables came from.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

STDIN_SOURCE = "<stdin>"


class SchemaLoaderError(Exception):
    """A schema document could not be read or decoded."""

    pass


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", source, e)
        raise SchemaLoaderError(f"Invalid JSON in {source}: {e}") from e


def load_schema_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Read a schema document from disk.

    A file without a ``.json`` suffix is still read; introspection dumps
    are often saved as ``.txt`` or without extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SchemaLoaderError: If it cannot be read or is not valid JSON.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoaderError(f"Error reading file {path}: {e}") from e

    document = _decode(text, f"file {path}")
    logger.info("Loaded schema from %s", path)
    return str(path), document


def load_schema_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Fetch a schema document over HTTP(S).

    Raises:
        SchemaLoaderError: On a malformed URL, a failed request or a body
            that is not JSON.
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        raise SchemaLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching schema from %s (timeout %ss)", url, timeout)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        raise SchemaLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e

    try:
        document = response.json()
    except ValueError as e:
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e

    logger.info("Loaded schema from %s", url)
    return url, document


def load_schema_from_stream(stream: TextIO | None = None) -> tuple[str, Any]:
    """Read a schema document from a text stream, standard input by default."""
    document = _decode((stream or sys.stdin).read(), "standard input")
    logger.info("Loaded schema from standard input")
    return STDIN_SOURCE, document


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load a schema document from exactly one of a file or a URL.

    Raises:
        SchemaLoaderError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If the file doesn't exist.
    """
    if file_path and url:
        raise SchemaLoaderError("Cannot specify both file_path and url")
    if file_path:
        return load_schema_from_file(file_path)
    if url:
        return load_schema_from_url(url, timeout)
    raise SchemaLoaderError("Either file_path or url must be provided")
