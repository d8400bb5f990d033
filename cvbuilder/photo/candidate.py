"""
Selected photo files.

A candidate is anything that reports its MIME type and byte size up front
and can be read asynchronously. PhotoFile covers files on disk and
in-memory uploads.
"""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class PhotoCandidate(Protocol):
    type: str
    size: int

    async def read(self) -> bytes:
        ...


@dataclass(frozen=True)
class PhotoFile:
    """
    A user-selected photo.

    Exactly one of `path` and `content` is set. `type` and `size` are the
    values reported at selection time and are what validation looks at.
    """
    name: str
    type: str
    size: int
    path: Optional[Path] = None
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "PhotoFile":
        """
        Describe a file on disk; the MIME type is guessed from its name.

        Raises:
            OSError: If the file cannot be stat'ed
        """
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            type=mime_type or guessed or "",
            size=path.stat().st_size,
            path=path,
        )

    @classmethod
    def from_bytes(cls, name: str, content: bytes, mime_type: Optional[str] = None) -> "PhotoFile":
        guessed, _ = mimetypes.guess_type(name)
        return cls(name=name, type=mime_type or guessed or "", size=len(content), content=content)

    async def read(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise OSError(f"{self.name}: no content to read")
        return await asyncio.to_thread(self.path.read_bytes)
