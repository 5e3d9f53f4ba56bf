"""
Utils Package

Payload encoding helpers.
"""

from .data_uri import (
    DEFAULT_MIME_TYPE,
    DataUriError,
    decode_data_uri,
    encode_data_uri,
    sniff_mime_type,
)

__all__ = [
    "DEFAULT_MIME_TYPE",
    "DataUriError",
    "decode_data_uri",
    "encode_data_uri",
    "sniff_mime_type",
]
