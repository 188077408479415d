"""Image selection and encoding."""

from fingercount.images.encoder import encode_file
from fingercount.images.types import (
    ImageAsset,
    InMemoryFile,
    LocalFile,
    SelectedFile,
    parse_data_uri,
)

__all__ = [
    "ImageAsset",
    "InMemoryFile",
    "LocalFile",
    "SelectedFile",
    "encode_file",
    "parse_data_uri",
]
