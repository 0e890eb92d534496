"""Palette mapper backed by the GW2 API.

PaletteMapper converts between build-code palette indices and skill ids
for each profession. Palette data is fetched from the GW2 API on first use
and cached in memory; an entry older than the configured TTL is fetched
again on its next use. There is no background refresh.

Translation methods propagate every fetch failure. The detail lookups
(skills, specializations, pets) are advisory: any failure there is
reported as None.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from gw2palette.config import PaletteMapperSettings
from gw2palette.services.gw2_client import Gw2ApiClient
from gw2palette.services.palette_index import (
    CacheEntry,
    PaletteIndex,
    build_palette_index,
)
from gw2palette.shared.errors import (
    PaletteMapperError,
    UnmappedPaletteError,
    UnmappedSkillError,
)
from gw2palette.shared.logging import log_operation_error, log_operation_success
from gw2palette.shared.models import PetDetail, SkillDetail, SpecializationDetail

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaletteMapper:
    """Bidirectional palette index / skill id converter with a per-profession cache.

    Concurrent requests for the same missing or stale profession share a
    single in-flight fetch.

    Args:
        settings: Construction options. Defaults to PaletteMapperSettings().
        client: GW2 API client. Defaults to a Gw2ApiClient built from settings,
            which the mapper then owns and closes in close().
        clock: Monotonic clock in seconds, used for cache freshness.

    Example:
        >>> async with PaletteMapper() as mapper:
        ...     skill_id = await mapper.palette_to_skill(Profession.GUARDIAN, 1)
        ...     palette = await mapper.skill_to_palette(Profession.GUARDIAN, skill_id)
    """

    def __init__(
        self,
        settings: PaletteMapperSettings | None = None,
        *,
        client: Gw2ApiClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if settings is None:
            settings = client.settings if client is not None else PaletteMapperSettings()
        self.settings = settings
        self._client = client or Gw2ApiClient(settings)
        self._owns_client = client is None
        self._clock = clock

        self._cache: dict[int, CacheEntry] = {}
        self._in_flight: dict[int, asyncio.Task[PaletteIndex]] = {}

        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._fetch_failures = 0

    async def __aenter__(self) -> PaletteMapper:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the API client if this mapper created it."""
        if self._owns_client:
            await self._client.close()

    async def palette_to_skill(self, profession: int, palette_index: int) -> int:
        """Convert a palette index to a skill id.

        Args:
            profession: Profession code
            palette_index: Palette index from a build code (0 means no skill)

        Returns:
            The skill id, or 0 for palette index 0

        Raises:
            UnmappedPaletteError: If the palette index has no skill for the profession
            PaletteMapperError: Any failure raised while fetching palette data
        """
        if palette_index == 0:
            return 0

        index = await self.ensure_fresh(profession)
        skill_id = index.skill_for(palette_index)
        if skill_id is None:
            error = UnmappedPaletteError(profession, palette_index)
            log_operation_error(logger=logger, error=error, level=logging.DEBUG)
            raise error
        return skill_id

    async def skill_to_palette(self, profession: int, skill_id: int) -> int:
        """Convert a skill id to a palette index.

        Args:
            profession: Profession code
            skill_id: Skill id to encode (0 means no skill)

        Returns:
            The palette index, or 0 for skill id 0

        Raises:
            UnmappedSkillError: If the skill has no palette index for the profession
            PaletteMapperError: Any failure raised while fetching palette data
        """
        if skill_id == 0:
            return 0

        index = await self.ensure_fresh(profession)
        palette_index = index.palette_for(skill_id)
        if palette_index is None:
            error = UnmappedSkillError(profession, skill_id)
            log_operation_error(logger=logger, error=error, level=logging.DEBUG)
            raise error
        return palette_index

    def invalidate(self, profession: int | None = None) -> None:
        """Drop cached palette data for one profession, or for all of them.

        A fetch already in flight for a dropped profession still answers its
        waiters but is not stored.
        """
        if profession is not None:
            self._cache.pop(profession, None)
            self._in_flight.pop(profession, None)
        else:
            self._cache.clear()
            self._in_flight.clear()

    clear_cache = invalidate

    async def ensure_fresh(self, profession: int) -> PaletteIndex:
        """Return a fresh PaletteIndex for the profession, fetching if needed.

        A cached index is reused while it is younger than the cache TTL.
        Otherwise the profession is fetched and the new index replaces the
        old entry. On failure the error propagates and the cache is left as
        it was; a stale entry is never served as a fallback.
        """
        now = self._clock()
        entry = self._cache.get(profession)
        if entry is not None and entry.is_fresh(now, self.settings.cache_ttl_seconds):
            self._hits += 1
            return entry.index

        self._misses += 1
        task = self._in_flight.get(profession)
        if task is None or task.done():
            task = asyncio.ensure_future(self._refresh(profession, now))
            self._in_flight[profession] = task
            task.add_done_callback(
                lambda done, key=profession: self._forget_in_flight(key, done),
            )
        # shield: one cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    async def _refresh(self, profession: int, now: float) -> PaletteIndex:
        self._fetches += 1
        start = time.perf_counter()
        try:
            payload = await self._client.fetch_profession(profession)
        except PaletteMapperError:
            self._fetch_failures += 1
            raise

        index = build_palette_index(payload)
        if self._in_flight.get(profession) is asyncio.current_task():
            self._cache[profession] = CacheEntry(index=index, fetched_at=now)

        log_operation_success(
            logger=logger,
            operation="refresh_palette",
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"mapped_skills": len(index)},
            context={"profession": payload.name},
        )
        return index

    def _forget_in_flight(self, profession: int, task: asyncio.Task[PaletteIndex]) -> None:
        if self._in_flight.get(profession) is task:
            del self._in_flight[profession]
        if not task.cancelled():
            # Mark the exception retrieved even if every waiter went away
            task.exception()

    async def lookup_skill_detail(self, skill_id: int) -> SkillDetail | None:
        """Fetch skill details, or None if unavailable for any reason."""
        if skill_id == 0:
            return None
        return await self._lookup_detail(
            self._client.fetch_skill, skill_id, "lookup_skill_detail"
        )

    async def lookup_specialization_detail(
        self, spec_id: int
    ) -> SpecializationDetail | None:
        """Fetch specialization details, or None if unavailable for any reason."""
        if spec_id == 0:
            return None
        return await self._lookup_detail(
            self._client.fetch_specialization, spec_id, "lookup_specialization_detail"
        )

    async def lookup_pet_detail(self, pet_id: int) -> PetDetail | None:
        """Fetch pet details, or None if unavailable for any reason."""
        if pet_id == 0:
            return None
        return await self._lookup_detail(
            self._client.fetch_pet, pet_id, "lookup_pet_detail"
        )

    async def _lookup_detail(
        self,
        fetch: Callable[[int], Awaitable[T]],
        detail_id: int,
        operation: str,
    ) -> T | None:
        try:
            return await fetch(detail_id)
        except PaletteMapperError as e:
            logger.warning(
                "%s(%s) failed, reporting not found: %s",
                operation,
                detail_id,
                e,
                extra={"operation": operation, "error_code": e.code.value},
            )
            return None

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        ``hits`` and ``misses`` count ensure_fresh calls, one per caller, so
        several callers that join one in-flight fetch each add a miss while
        ``fetches`` grows by one.

        Returns:
            Dictionary with cached professions and hit/miss/fetch counters
        """
        return {
            "cached_professions": sorted(int(p) for p in self._cache),
            "in_flight": len(self._in_flight),
            "hits": self._hits,
            "misses": self._misses,
            "fetches": self._fetches,
            "fetch_failures": self._fetch_failures,
        }


__all__ = ["PaletteMapper"]
