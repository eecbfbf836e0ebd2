"""
Error payload returned by the Vagrant Cloud API on failure status codes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Self

import httpx

from vagrant_cloud.api.http_client import decode_body


@dataclass(frozen=True, kw_only=True)
class APIErrorResponse:
    """
    Decoded ``{"errors": {"field": ["message", ...]}}`` body.

    The client never builds one itself; callers decode non-2xx responses
    with ``APIErrorResponse.from_response`` when they need a readable reason.
    """

    errors: Mapping[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """
        Build from a decoded JSON body.

        Entries that are not a mapping of field names to message lists are
        dropped.
        """
        raw = data.get("errors") if isinstance(data, dict) else None
        if not isinstance(raw, dict):
            return cls()
        errors = {
            str(name): [str(m) for m in messages]
            for name, messages in raw.items()
            if isinstance(messages, list)
        }
        return cls(errors=errors)

    @classmethod
    def from_response(cls, response: httpx.Response) -> Self:
        """
        Decode an API response body.

        Raises:
            ResponseDecodeError: If the body is not valid JSON.
        """
        return cls.from_dict(decode_body(response))

    def render(self) -> str:
        """Render as ``"<field> <msg>,<msg>. <field> <msg>"``."""
        return ". ".join(
            f"{name} {','.join(messages)}" for name, messages in self.errors.items()
        )

    def __str__(self) -> str:
        return self.render()
