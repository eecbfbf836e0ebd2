"""
Vagrant Cloud API client layer.

Provides HTTP communication with the Vagrant Cloud API and upload progress
reporting.
"""

from vagrant_cloud.api.http_client import (
    ACCESS_TOKEN_PLACEHOLDER,
    VagrantCloudClient,
    decode_body,
    encode_body,
    sanitize_for_log,
)
from vagrant_cloud.api.progress import ProgressConfig, ProgressReader, format_bytes

__all__ = [
    "ACCESS_TOKEN_PLACEHOLDER",
    "ProgressConfig",
    "ProgressReader",
    "VagrantCloudClient",
    "decode_body",
    "encode_body",
    "format_bytes",
    "sanitize_for_log",
]
