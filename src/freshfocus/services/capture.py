"""Scoped access to image capture sources."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Protocol


class FrameSource(Protocol):
    """A capture device that must be released once opened."""

    async def open(self) -> None:
        """Acquire the device."""

    async def read_frame(self) -> bytes:
        """Return one encoded frame."""

    async def release(self) -> None:
        """Stop the device and free it for other users."""


@asynccontextmanager
async def acquire(source: FrameSource) -> AsyncIterator[FrameSource]:
    """Open a frame source and release it on every exit path."""
    try:
        await source.open()
        yield source
    finally:
        await source.release()


@dataclass
class StaticFrameSource:
    """Frame source over a single already-captured frame."""

    frame: bytes
    opened: bool = False

    async def open(self) -> None:
        """Mark the frame as available."""
        self.opened = True

    async def read_frame(self) -> bytes:
        """Return the captured frame."""
        if not self.opened:
            raise RuntimeError("Frame source is not open")
        return self.frame

    async def release(self) -> None:
        """Drop the frame."""
        self.opened = False
        self.frame = b""
