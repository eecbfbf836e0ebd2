"""
Vagrant Cloud Python Client.

A small, synchronous client for the Vagrant Cloud API that keeps the access
token out of logs.

Example:
    ```python
    from vagrant_cloud import DEFAULT_BASE_URL, APIErrorResponse, VagrantCloudClient

    with VagrantCloudClient(DEFAULT_BASE_URL, token) as client:
        response = client.post("box/acme/base/versions", {"version": {"version": "1.0.0"}})
        if response.is_error:
            print(APIErrorResponse.from_response(response).render())

        # Upload a box to a pre-signed URL
        client.upload("base.box", upload_url, print)
    ```
"""

from vagrant_cloud.api.http_client import ACCESS_TOKEN_PLACEHOLDER, VagrantCloudClient
from vagrant_cloud.api.progress import ProgressConfig, ProgressReader
from vagrant_cloud.config import DEFAULT_BASE_URL, ClientConfig
from vagrant_cloud.exceptions import (
    RequestEncodingError,
    ResponseDecodeError,
    UploadError,
    VagrantCloudError,
)
from vagrant_cloud.models.errors import APIErrorResponse

__version__ = "0.1.0"

__all__ = [
    # Main client
    "VagrantCloudClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "ACCESS_TOKEN_PLACEHOLDER",
    # Uploads
    "ProgressConfig",
    "ProgressReader",
    # Models
    "APIErrorResponse",
    # Exceptions
    "VagrantCloudError",
    "RequestEncodingError",
    "ResponseDecodeError",
    "UploadError",
]
