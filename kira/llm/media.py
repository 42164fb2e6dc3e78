"""
Media helpers: load source documents and encode them as data URIs.

A data URI (``data:<mime>;base64,<payload>``) is the single self-describing
form in which documents travel from the pipelines to the model client.
"""

import base64
import binascii
import logging
import mimetypes
import os
from typing import Optional, Tuple

import httpx

from kira.errors import ExtractionFailed, NotFound

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

# Leading characters of base64-encoded files, by format
_BASE64_SIGNATURES = (
    ("/9j/", "image/jpeg"),
    ("iVBORw0KGgo", "image/png"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
    ("JVBERi0", "application/pdf"),
)


def guess_mime_type(source: str) -> str:
    """
    Infer a media type from a path or URL extension.

    PDFs map to application/pdf; anything unknown falls back to image/jpeg.
    """
    path = source.split("?", 1)[0]
    mime_type, _ = mimetypes.guess_type(path)
    if mime_type:
        return mime_type

    extension = os.path.splitext(path)[1].lower().lstrip(".")
    if extension == "pdf":
        return "application/pdf"
    if extension:
        return f"image/{extension}"
    return DEFAULT_MIME_TYPE


def sniff_base64_mime_type(data_base64: str) -> str:
    """Detect MIME type from a base64 header, defaulting to image/jpeg."""
    for prefix, mime_type in _BASE64_SIGNATURES:
        if data_base64.startswith(prefix):
            return mime_type
    return DEFAULT_MIME_TYPE


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a data URI."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into its media type and raw bytes.

    Raises:
        ValueError: If the string is not a base64 data URI.
    """
    if not data_uri.startswith("data:") or "," not in data_uri:
        raise ValueError("Not a data URI")

    header, payload = data_uri[len("data:"):].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")

    mime_type = header[: -len(";base64")] or DEFAULT_MIME_TYPE
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

    return mime_type, data


def load_document(source: str, mime_type: Optional[str] = None) -> str:
    """
    Load a source document and return it as a data URI.

    Paths and URLs are resolved on this machine, so only trusted callers
    (scripts, jobs) pass them; the HTTP routes accept uploaded bytes only.

    Args:
        source: Local path, http(s) URL, or an existing data URI
        mime_type: Media type; inferred from the source when omitted

    Returns:
        The document encoded as ``data:<mime>;base64,<payload>``.

    Raises:
        NotFound: If a local path does not exist or a URL returns 404.
        ExtractionFailed: If the document cannot be fetched.
    """
    if source.startswith("data:"):
        return source

    if source.startswith(("http://", "https://")):
        logger.info("Fetching source document over HTTP")
        try:
            response = httpx.get(source, follow_redirects=True, timeout=30.0)
        except httpx.HTTPError as e:
            raise ExtractionFailed(f"Could not fetch document: {e}") from e

        if response.status_code == 404:
            raise NotFound(f"Document not found at {source}")
        if response.is_error:
            raise ExtractionFailed(
                f"Could not fetch document: HTTP {response.status_code}"
            )

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        resolved = mime_type or content_type or guess_mime_type(source)
        return encode_data_uri(response.content, resolved)

    path = os.path.abspath(source)
    if not os.path.isfile(path):
        raise NotFound(f"Document not found: {source}")

    with open(path, "rb") as f:
        data = f.read()

    logger.info(f"Loaded source document ({len(data)} bytes)")
    return encode_data_uri(data, mime_type or guess_mime_type(path))
