"""
Upload progress reporting.

A ProgressReader wraps the file being uploaded and reports how much of it
the transport has consumed. Reporting settings are passed per upload through
ProgressConfig; nothing here is process-wide.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import BinaryIO

ProgressCallback = Callable[[str], None]

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def format_bytes(size: int) -> str:
    """
    Format a byte count with binary units.

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(3 * 1024 * 1024)
        '3.0 MiB'
    """
    if size < 1024:
        return f"{size} B"
    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS[1:]:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"


@dataclass(frozen=True, kw_only=True)
class ProgressConfig:
    """
    Attributes:
        chunk_size: Number of bytes read from the file per streamed chunk.
        min_interval_bytes: Minimum number of bytes read between two progress
            notifications. 0 notifies on every chunk. The chunk that reaches
            the total always notifies.
        bar_width: Number of cells in the rendered bar.
    """

    chunk_size: int = 64 * 1024
    min_interval_bytes: int = 1024 * 1024
    bar_width: int = 40

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
        if self.min_interval_bytes < 0:
            msg = "min_interval_bytes must be non-negative"
            raise ValueError(msg)
        if self.bar_width <= 0:
            msg = "bar_width must be positive"
            raise ValueError(msg)


class ProgressReader:
    """
    Readable wrapper that reports consumption of the wrapped stream.

    The callback runs synchronously inside ``read()``, on whatever thread the
    transport reads the request body from.

    Note:
        Exposes neither ``fileno()`` nor ``tell()``, so HTTP libraries cannot
        infer the body length from it. Callers set Content-Length themselves.
        Iterating the reader yields ``chunk_size`` reads until EOF.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        total: int,
        callback: ProgressCallback,
        config: ProgressConfig | None = None,
    ) -> None:
        """
        Args:
            stream: Binary stream to read from. Not closed by the reader.
            total: Expected number of bytes.
            callback: Receives a rendered progress line.
            config: Notification settings. Uses defaults if not provided.
        """
        self._stream = stream
        self._total = total
        self._callback = callback
        self._config = config or ProgressConfig()
        self._bytes_read = 0
        self._last_notified = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def bytes_read(self) -> int:
        return self._bytes_read

    def read(self, size: int = -1) -> bytes:
        chunk = self._stream.read(size)
        if chunk:
            self._bytes_read += len(chunk)
            self._maybe_notify()
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        while chunk := self.read(self._config.chunk_size):
            yield chunk

    def render(self) -> str:
        """Render the current state, e.g. ``1.0 MiB / 4.0 MiB [==>   ] 25.00%``."""
        ratio = 1.0 if self._total <= 0 else min(self._bytes_read / self._total, 1.0)
        width = self._config.bar_width
        filled = int(ratio * width)
        if filled >= width:
            bar = "=" * width
        else:
            bar = "=" * filled + ">" + " " * (width - filled - 1)
        return (
            f"{format_bytes(self._bytes_read)} / {format_bytes(self._total)} "
            f"[{bar}] {ratio * 100:.2f}%"
        )

    def _maybe_notify(self) -> None:
        reached_total = self._bytes_read >= self._total
        since_last = self._bytes_read - self._last_notified
        if reached_total or since_last >= self._config.min_interval_bytes:
            self._last_notified = self._bytes_read
            self._callback(self.render())
