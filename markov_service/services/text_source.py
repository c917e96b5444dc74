"""
File access for training text and persisted chains.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Union

from .errors import NotFoundError

PathLike = Union[str, Path]


def read_all_text(path: PathLike) -> str:
    """Read a UTF-8 file; NotFoundError if it does not exist."""
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return f.read()


def write_all_text(path: PathLike, text: str):
    """Write a UTF-8 file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(text)


async def read_all_text_async(path: PathLike) -> str:
    return await asyncio.to_thread(read_all_text, path)


async def write_all_text_async(path: PathLike, text: str):
    await asyncio.to_thread(write_all_text, path, text)
