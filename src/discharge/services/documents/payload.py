from __future__ import annotations

import base64
import binascii
from typing import Optional, Tuple

from fastapi import UploadFile

from src.discharge.domain.models.discharge_request import AttachmentUpload, UploadedDocument
from src.discharge.services.documents.errors import (
    AttachmentReadError,
    AttachmentTooLargeError,
    UnsupportedMediaTypeError,
)

ALLOWED_CONTENT_TYPES = frozenset({"application/pdf", "image/jpeg", "image/jpg"})

# Minimal PDF header embedded when no document is attached.
PLACEHOLDER_CONTENT_TYPE = "application/pdf"
PLACEHOLDER_PDF_B64 = "JVBERi0xLjQKJeLjz9MK"

_TRANSPORT_MARKER = "base64,"


def normalize_content_type(content_type: Optional[str]) -> str:
    """``"Application/PDF; name=x"`` -> ``"application/pdf"``."""

    return (content_type or "").split(";", 1)[0].strip().lower()


def ensure_allowed_content_type(content_type: Optional[str]) -> str:
    """Return the normalized media type or raise UnsupportedMediaTypeError."""

    media_type = normalize_content_type(content_type)
    if media_type not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedMediaTypeError(content_type)
    return media_type


def strip_transport_prefix(text: str) -> str:
    """Drop a data-URL wrapper (``data:<type>;base64,``) if one is present."""

    idx = text.find(_TRANSPORT_MARKER)
    if idx >= 0:
        return text[idx + len(_TRANSPORT_MARKER):]
    return text


def _check_size(size: int, max_bytes: Optional[int]) -> None:
    if max_bytes is not None and size > max_bytes:
        raise AttachmentTooLargeError(size, max_bytes)


async def read_upload(upload: UploadFile, *, max_bytes: Optional[int] = None) -> UploadedDocument:
    """Validate and read a multipart upload.

    The media type is checked before any bytes are read. Read failures raise
    AttachmentReadError rather than falling back to the placeholder.
    """

    media_type = ensure_allowed_content_type(upload.content_type)
    try:
        content = await upload.read()
    except (OSError, ValueError) as exc:
        raise AttachmentReadError() from exc
    _check_size(len(content), max_bytes)
    return UploadedDocument(content_type=media_type, filename=upload.filename, data=content)


def attachment_from_base64(upload: AttachmentUpload, *, max_bytes: Optional[int] = None) -> UploadedDocument:
    """Decode an attachment that arrived as base64 (or data-URL) text in JSON."""

    media_type = ensure_allowed_content_type(upload.content_type)
    encoded = strip_transport_prefix(upload.data).strip()
    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AttachmentReadError("Attachment data is not valid base64") from exc
    _check_size(len(content), max_bytes)
    return UploadedDocument(content_type=media_type, filename=upload.filename, data=content)


def encode_payload(document: Optional[UploadedDocument]) -> Tuple[str, str]:
    """Return ``(content_type, base64 text)`` for the Binary resource."""

    if document is None:
        return PLACEHOLDER_CONTENT_TYPE, PLACEHOLDER_PDF_B64
    media_type = ensure_allowed_content_type(document.content_type)
    return media_type, base64.b64encode(document.data).decode("ascii")
