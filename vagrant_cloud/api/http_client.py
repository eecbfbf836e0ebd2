"""
HTTP client for the Vagrant Cloud API.

Every call is a single blocking attempt. Responses come back raw, whatever
their status code; only local failures raise library errors, and transport
failures surface as the underlying httpx exceptions.

The access token travels as a query parameter, so URLs are never logged as
sent: log records carry a URL rebuilt with a placeholder in the token's place.
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Self
from urllib.parse import quote, quote_plus, urlencode

import httpx
import structlog

from vagrant_cloud.api.progress import ProgressCallback, ProgressConfig, ProgressReader
from vagrant_cloud.config import ClientConfig
from vagrant_cloud.exceptions import RequestEncodingError, ResponseDecodeError, UploadError

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_PLACEHOLDER = "ACCESS_TOKEN"

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "token",
        "password",
        "secret",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    return {
        key: "***" if key in SENSITIVE_KEYS else _sanitize_value(value)
        for key, value in data.items()
    }


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return sanitize_for_log(value)
    if isinstance(value, list | tuple):
        return [_sanitize_value(item) for item in value]
    return value


def encode_body(obj: Any) -> bytes:
    """
    Encode a request body as JSON.

    Raises:
        TypeError: If a value is not JSON serializable.
        ValueError: If the structure contains a circular reference.
    """
    return json.dumps(obj).encode()


def decode_body(response: httpx.Response) -> Any:
    """
    Read and decode a JSON response body, closing the response.

    Raises:
        ResponseDecodeError: If the body is not valid JSON.
    """
    try:
        response.read()
        return json.loads(response.content)
    except ValueError as e:
        raise ResponseDecodeError(
            "Invalid JSON response from API", status_code=response.status_code
        ) from e
    finally:
        response.close()


def _join_url(base_url: str, path: str, token: str) -> str:
    query = urlencode({"access_token": token})
    return f"{base_url}/{path}?{query}"


class VagrantCloudClient:
    """
    Synchronous client for the Vagrant Cloud API.

    Example:
        ```python
        with VagrantCloudClient(DEFAULT_BASE_URL, token) as client:
            response = client.get("box/hashicorp/precise64")
            if response.is_error:
                raise SystemExit(APIErrorResponse.from_response(response).render())
        ```

    The underlying connection pool is safe to share between threads; the
    client itself holds no mutable state.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        *,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. "https://vagrantcloud.com/api/v1".
            access_token: Token appended to every API request.
            config: Client configuration. Uses defaults if not provided.
            transport: Optional transport for testing (mock transport).
        """
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._config = config or ClientConfig()
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._config.timeout),
            transport=transport,
            trust_env=self._config.trust_env,
            headers={"User-Agent": self._config.user_agent},
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r})"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        self._client.close()

    def get(self, path: str) -> httpx.Response:
        """GET ``{base_url}/{path}``."""
        return self._send("GET", path)

    def delete(self, path: str) -> httpx.Response:
        """DELETE ``{base_url}/{path}``."""
        return self._send("DELETE", path)

    def put(self, path: str) -> httpx.Response:
        """
        PUT ``{base_url}/{path}`` with an empty body.

        Endpoints that need a payload are called with ``post``.
        """
        return self._send("PUT", path)

    def post(self, path: str, body: Any) -> httpx.Response:
        """
        POST ``body`` as JSON to ``{base_url}/{path}``.

        Raises:
            RequestEncodingError: If ``body`` cannot be encoded. No request is sent.
        """
        try:
            content = encode_body(body)
        except (TypeError, ValueError) as e:
            msg = f"Error encoding body for request: {e}"
            raise RequestEncodingError(msg) from e

        return self._send("POST", path, content=content, body=_sanitize_value(body))

    def upload(
        self,
        local_path: str | os.PathLike[str],
        target_url: str,
        progress: ProgressCallback,
        *,
        progress_config: ProgressConfig | None = None,
    ) -> httpx.Response:
        """
        Stream a local file to a pre-signed upload URL with PUT.

        ``progress`` is called once before sending, from within the body
        reads while the transport consumes the file, and exactly once after
        the transport returns or fails.

        Args:
            local_path: File to upload.
            target_url: Pre-signed URL from the upload endpoint. Used as is.
            progress: Receives human-readable progress lines.
            progress_config: Per-upload notification settings.

        Returns:
            The raw response. Callers check the status code.

        Raises:
            UploadError: If the file cannot be opened or stat'ed, or the
                request cannot be built. No request is sent.
            httpx.TransportError: If the upload fails in transit.
        """
        path = Path(local_path)
        try:
            file = path.open("rb")
        except OSError as e:
            msg = f"Error opening file for upload: {e}"
            raise UploadError(msg, path=str(path)) from e

        with file:
            try:
                size = os.fstat(file.fileno()).st_size
            except OSError as e:
                msg = f"Error stating file for upload: {e}"
                raise UploadError(msg, path=str(path)) from e

            reader = ProgressReader(file, total=size, callback=progress, config=progress_config)
            try:
                request = self._client.build_request(
                    "PUT",
                    target_url,
                    content=iter(reader),
                    headers={"Content-Length": str(size)},
                )
            except httpx.InvalidURL as e:
                msg = f"Error preparing upload request: {e}"
                raise UploadError(msg, path=str(path)) from e

            # Pre-signed URLs carry their own credentials in the query string.
            log_url = str(request.url.copy_with(query=None))
            logger.debug("Upload request", path=self._redact(str(path)), url=log_url, size=size)

            progress(f"Making upload request. Progress bar should look like: {reader.render()}")
            try:
                return self._dispatch(request, url=log_url)
            finally:
                progress("Completed upload request.")

    def _request_url(self, path: str) -> str:
        return _join_url(self._base_url, path, self._access_token)

    def _log_url(self, path: str) -> str:
        return _join_url(
            self._redact(self._base_url), self._redact(path), ACCESS_TOKEN_PLACEHOLDER
        )

    def _redact(self, value: str) -> str:
        """Replace the token, raw or percent-encoded, inside a log field."""
        token = self._access_token
        if not token:
            return value
        for form in {token, quote(token, safe=""), quote_plus(token)}:
            value = value.replace(form, ACCESS_TOKEN_PLACEHOLDER)
        return value

    def _send(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        **log_fields: Any,
    ) -> httpx.Response:
        url = self._request_url(path)
        log_url = self._log_url(path)
        logger.debug("API request", method=method, url=log_url, **log_fields)

        request = self._client.build_request(
            method,
            url,
            content=content,
            headers={"Content-Type": "application/json"},
        )
        return self._dispatch(request, url=log_url)

    def _dispatch(self, request: httpx.Request, *, url: str) -> httpx.Response:
        start = time.perf_counter()
        try:
            response = self._client.send(request)
        except httpx.TransportError as e:
            logger.debug(
                "API request failed",
                method=request.method,
                url=url,
                error_type=type(e).__name__,
            )
            raise
        elapsed = time.perf_counter() - start

        fields: dict[str, Any] = {}
        if self._config.log_body_limit > 0:
            head = response.content[: self._config.log_body_limit]
            text = head.decode(response.encoding or "utf-8", errors="replace")
            fields["body"] = self._redact(text)
        logger.debug(
            "API response",
            method=request.method,
            url=url,
            status_code=response.status_code,
            elapsed=round(elapsed, 3),
            **fields,
        )
        return response
