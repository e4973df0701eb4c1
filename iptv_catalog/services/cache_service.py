"""
Cache Gate

File-backed cache for raw source text. An entry is a single file whose
modification time is its last-write timestamp; the payload is stored as-is.
"""
from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import time
from datetime import timedelta
from pathlib import Path
from typing import Awaitable, Callable

import aiofiles
import aiofiles.os

from iptv_catalog.utils.file_operations import atomic_write_text


logger = logging.getLogger(__name__)

Supplier = Callable[[], Awaitable[str]]


def cache_key_for(source_url: str) -> str:
    """Cache file name for a source URL: ``iptv.<sha256 hex>.txt``."""
    digest = hashlib.sha256(source_url.encode("utf-8")).hexdigest()
    return f"iptv.{digest}.txt"


def _to_seconds(max_age: timedelta | float) -> float:
    if isinstance(max_age, timedelta):
        return max_age.total_seconds()
    return float(max_age)


class FileCacheGate:
    """
    Return cached text while fresh, otherwise produce and store a new payload.

    Concurrent misses for the same key are not serialized: every caller runs
    the supplier and the last write wins.
    """

    def __init__(self, cache_dir: Path | str, clock: Callable[[], float] = time.time) -> None:
        self.cache_dir = Path(cache_dir)
        self._clock = clock

    def path_for(self, key: str) -> Path:
        return self.cache_dir / key

    async def read_fresh(self, key: str, max_age: timedelta | float) -> str | None:
        """
        Read the stored payload if it is not older than ``max_age``

        A zero (or negative) ``max_age`` never counts as fresh.

        Returns:
            Cached text, or None if missing or stale
        """
        max_age_sec = _to_seconds(max_age)
        if max_age_sec <= 0:
            return None

        path = self.path_for(key)
        try:
            stat = await aiofiles.os.stat(path)
        except FileNotFoundError:
            logger.debug(f"Cache miss (no entry): {key}")
            return None

        age = self._clock() - stat.st_mtime
        if age > max_age_sec:
            logger.debug(f"Cache miss (stale, age {age:.1f}s > {max_age_sec:.1f}s): {key}")
            return None

        try:
            async with aiofiles.open(path, "r", encoding="utf-8", newline="") as f:
                text = await f.read()
        except FileNotFoundError:
            # Entry cleared between stat and open
            return None

        logger.debug(f"Cache hit (age {age:.1f}s): {key}")
        return text

    async def write(self, key: str, text: str) -> None:
        """Store ``text`` under ``key``, stamped with the current clock time."""
        path = await atomic_write_text(self.path_for(key), text)
        now = self._clock()
        await asyncio.to_thread(os.utime, path, (now, now))

    async def resolve(self, key: str, max_age: timedelta | float, supplier: Supplier) -> str:
        """
        Return fresh cached text for ``key`` or refresh it via ``supplier``

        Args:
            key: Cache file name
            max_age: Maximum staleness (timedelta or seconds)
            supplier: Zero-argument coroutine function producing the text

        Returns:
            Cached or freshly supplied text

        Raises:
            Whatever ``supplier`` raises; the cache is not modified in that case
        """
        cached = await self.read_fresh(key, max_age)
        if cached is not None:
            return cached

        text = await supplier()
        await self.write(key, text)
        logger.info(f"Cache refreshed: {key} ({len(text)} characters)")
        return text

    async def clear(self, key: str) -> bool:
        """Remove the entry for ``key``; returns False if there was none."""
        try:
            await aiofiles.os.remove(self.path_for(key))
        except FileNotFoundError:
            return False
        logger.info(f"Cache cleared: {key}")
        return True
