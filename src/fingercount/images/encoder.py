"""Turns a user-selected file into an in-memory image asset."""

from __future__ import annotations

import asyncio
import logging

from fingercount.errors import ImageEncodingError, InvalidDataURIError
from fingercount.images.types import ImageAsset, SelectedFile

logger = logging.getLogger(__name__)


async def encode_file(file: SelectedFile | None) -> ImageAsset | None:
    """Read ``file`` fully and encode it as a data URI asset.

    Returns None when no file was selected (the picker was cancelled). No
    size or type allow-list is applied; any file is accepted.
    """
    if file is None:
        return None

    try:
        data = await asyncio.to_thread(file.read)
    except OSError as e:
        raise ImageEncodingError(f"Could not read {file.name}: {e}") from e

    try:
        asset = ImageAsset.from_bytes(data, file.content_type)
    except InvalidDataURIError as e:
        raise ImageEncodingError(
            f"Could not encode {file.name} as {file.content_type!r}: {e}"
        ) from e
    logger.debug(
        "image_encoded",
        extra={
            "image.name": file.name,
            "image.mime_type": asset.mime_type,
            "image.bytes": len(data),
        },
    )
    return asset
