"""
Vagrant Cloud client configuration.
"""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://vagrantcloud.com/api/v1"


@dataclass(frozen=True, kw_only=True)
class ClientConfig:
    """
    Attributes:
        timeout: Request timeout in seconds. None disables the deadline.
        user_agent: User-Agent header value.
        trust_env: Honor proxy settings from the environment.
        log_body_limit: Maximum number of response body bytes included in
            the response log record, decoded with replacement characters.
            0 keeps bodies out of the logs.
    """

    timeout: float | None = None
    user_agent: str = "VagrantCloud-Python/0.1"
    trust_env: bool = True
    log_body_limit: int = 0

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.log_body_limit < 0:
            msg = "log_body_limit must be non-negative"
            raise ValueError(msg)
