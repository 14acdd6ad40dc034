"""Loading and saving documents as newline-separated bytes."""

from __future__ import annotations

import os
from typing import List

from femto.runtime import telemetry

logger = telemetry.get_logger("femto.buffer.fileio")


class FileIOError(OSError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: str, reason: str = "") -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason or message


def split_lines(data: bytes) -> List[bytes]:
    """Split file content into lines, accepting ``\\n`` and ``\\r\\n``."""

    if not data:
        return []
    body = data[:-1] if data.endswith(b"\n") else data
    return [part.rstrip(b"\r") for part in body.split(b"\n")]


def load_file(path: str) -> List[bytes]:
    with telemetry.span(
        "fileio::load", component="fileio", metadata={"path": path}
    ) as handle:
        try:
            with open(path, "rb") as fp:
                data = fp.read()
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise FileIOError(f"{path}: {reason}", path=path, reason=reason) from exc
        lines = split_lines(data)
        handle.add_metadata("lines", len(lines))
        return lines


def save_file(path: str, content: bytes) -> int:
    """Write ``content`` to ``path`` and return the number of bytes written.

    The file is truncated to the exact content length before writing. On
    failure the file on disk may be short or unchanged.
    """

    with telemetry.span(
        "fileio::save", component="fileio", metadata={"path": path}
    ) as handle:
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise FileIOError(f"{path}: {reason}", path=path, reason=reason) from exc
        try:
            os.ftruncate(fd, len(content))
            written = 0
            view = memoryview(content)
            while written < len(content):
                count = os.write(fd, view[written:])
                if count <= 0:
                    raise FileIOError(
                        f"{path}: short write", path=path, reason="short write"
                    )
                written += count
        except FileIOError:
            raise
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise FileIOError(f"{path}: {reason}", path=path, reason=reason) from exc
        finally:
            os.close(fd)
        handle.add_metadata("bytes", written)
        logger.info("saved %s (%d bytes)", path, written)
        return written


__all__ = ["FileIOError", "load_file", "save_file", "split_lines"]
