"""Types for user-selected images."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from fingercount.errors import InvalidDataURIError

DEFAULT_MIME_TYPE = "application/octet-stream"


def parse_data_uri(data_uri: str) -> tuple[str, str]:
    """Split a base64 data URI into ``(mime_type, base64_payload)``.

    The MIME type is the token between ``:`` and the first ``;`` in the
    header. Parameters such as ``charset`` may follow it, but the last one
    must be ``base64``. The payload is everything after the first comma.
    """
    if not data_uri.startswith("data:"):
        raise InvalidDataURIError("data URI must start with 'data:'")
    header, sep, payload = data_uri.partition(",")
    if not sep:
        raise InvalidDataURIError("data URI has no payload separator")
    mime_type, *params = header[len("data:") :].split(";")
    mime_type = mime_type.strip()
    if not params or params[-1].strip() != "base64":
        raise InvalidDataURIError("data URI is not base64 encoded")
    if not mime_type:
        raise InvalidDataURIError("data URI has no MIME type")
    return mime_type, payload


@dataclass(frozen=True, slots=True)
class ImageAsset:
    """An encoded image, ready to send to the model.

    Build one with ``from_bytes`` or ``from_data_uri``; the MIME type and
    payload are always consistent with the data URI.
    """

    data_uri: str
    mime_type: str
    base64_payload: str = field(repr=False)

    def __post_init__(self) -> None:
        mime_type, payload = parse_data_uri(self.data_uri)
        if mime_type != self.mime_type or payload != self.base64_payload:
            raise InvalidDataURIError("image asset fields disagree with data URI")

    @classmethod
    def from_data_uri(cls, data_uri: str) -> ImageAsset:
        mime_type, payload = parse_data_uri(data_uri)
        return cls(data_uri=data_uri, mime_type=mime_type, base64_payload=payload)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str | None) -> ImageAsset:
        # Parameters such as "; charset=utf-8" are not part of the MIME type.
        mime_type = (mime_type or "").split(";")[0].strip() or DEFAULT_MIME_TYPE
        payload = base64.b64encode(data).decode("ascii")
        return cls(
            data_uri=f"data:{mime_type};base64,{payload}",
            mime_type=mime_type,
            base64_payload=payload,
        )

    @property
    def size_bytes(self) -> int:
        """Decoded size of the payload."""
        padding = self.base64_payload.count("=", -2)
        return len(self.base64_payload) * 3 // 4 - padding

    def decode(self) -> bytes:
        """Return the original file bytes."""
        try:
            return base64.b64decode(self.base64_payload, validate=True)
        except binascii.Error as e:
            raise InvalidDataURIError(f"invalid base64 payload: {e}") from e


class SelectedFile(Protocol):
    """A file chosen by the user, with its reported content type."""

    @property
    def name(self) -> str: ...

    @property
    def content_type(self) -> str | None: ...

    def read(self) -> bytes:
        """Return the full file content."""
        ...


@dataclass(slots=True)
class LocalFile:
    """A file on the local filesystem.

    The content type is guessed from the file name, the same way a browser
    reports it for a picked file.
    """

    path: Path
    content_type: str | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()
        if self.content_type is None:
            self.content_type, _ = mimetypes.guess_type(self.path.name)

    @property
    def name(self) -> str:
        return self.path.name

    def read(self) -> bytes:
        return self.path.read_bytes()


@dataclass(slots=True)
class InMemoryFile:
    """A file whose content is already held in memory."""

    name: str
    data: bytes
    content_type: str | None = None

    def read(self) -> bytes:
        return self.data
