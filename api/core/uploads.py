"""
Multipart upload helpers shared by the stock and image routes.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import UploadFile

from .errors import UploadRejected, UploadTooLarge, ValidationError


def file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_extension(filename: str | None, allowed: set[str], *, message: str) -> str:
    """
    Return the normalized file extension if this upload is acceptable.

    We validate based on filename extension because `content_type`
    is often missing or incorrect in practice.
    """
    if not filename:
        raise ValidationError("Falta el nombre del archivo.")

    ext = file_ext(filename)
    if ext not in allowed:
        raise UploadRejected(message)
    return ext


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise UploadTooLarge(f"Archivo demasiado grande. El máximo es {max_bytes} bytes.")

    return bytes(buf)
