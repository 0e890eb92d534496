"""GW2 API client with request timeouts and typed errors.

This module provides an asynchronous client for the official Guild Wars 2
API using aiohttp. Every call issues exactly one request, bounded by the
configured timeout, and either returns a validated model or raises an
InfrastructureError subclass. Retrying is left to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, TypeVar

import aiohttp

from gw2palette.config import PaletteMapperSettings
from gw2palette.shared.constants import (
    APIFields,
    ContentTypes,
    GW2ApiConfig,
    HTTPHeaders,
    HTTPStatusCodes,
    get_profession_name,
)
from gw2palette.shared.errors import (
    ApiTimeoutError,
    InfrastructureError,
    MalformedResponseError,
    RemoteApiError,
    TransportError,
    UnknownProfessionError,
)
from gw2palette.shared.logging import (
    log_api_call,
    log_operation_error,
    log_operation_success,
)
from gw2palette.shared.models import (
    PaletteEntry,
    PayloadFormat,
    PetDetail,
    ProfessionPayload,
    SkillDetail,
    SpecializationDetail,
)
from gw2palette.shared.utils import from_dict

logger = logging.getLogger(__name__)

DetailT = TypeVar("DetailT", SkillDetail, SpecializationDetail, PetDetail)


def _parse_id(value: Any, *, allow_none: bool) -> int | None:
    """Validate a palette index or skill id from the payload.

    Raises:
        ValueError: If the value is not a non-negative integer (or None when allowed)
    """
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"expected a non-negative integer, got {value!r}")
    return value


def _parse_pairs(raw: list[Any]) -> tuple[PaletteEntry, ...]:
    entries: list[PaletteEntry] = []
    for position, item in enumerate(raw):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"entry {position} is not a [palette, skill] pair")
        try:
            palette_index = _parse_id(item[0], allow_none=False)
            skill_id = _parse_id(item[1], allow_none=True)
        except ValueError as e:
            raise ValueError(f"entry {position}: {e}") from e
        entries.append((palette_index, skill_id))  # type: ignore[arg-type]
    return tuple(entries)


def _parse_dense(raw: list[Any]) -> tuple[PaletteEntry, ...]:
    entries: list[PaletteEntry] = []
    for palette_index, item in enumerate(raw):
        try:
            entries.append((palette_index, _parse_id(item, allow_none=True)))
        except ValueError as e:
            raise ValueError(f"entry {palette_index}: {e}") from e
    return tuple(entries)


_PAYLOAD_PARSERS = {
    PayloadFormat.PAIRS: _parse_pairs,
    PayloadFormat.DENSE: _parse_dense,
}


class Gw2ApiClient:
    """Client for the GW2 official API.

    Args:
        settings: Construction options (base URL, timeout, payload format)
        session: Optional aiohttp session. When omitted the client creates
            one lazily and closes it in close().
    """

    def __init__(
        self,
        settings: PaletteMapperSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings or PaletteMapperSettings()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Gw2ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _url(self, path: str) -> str:
        return f"{self.settings.api_url}{path}"

    async def fetch_profession(self, profession: int) -> ProfessionPayload:
        """Fetch palette data for a profession.

        Args:
            profession: Profession code (see Profession)

        Returns:
            ProfessionPayload tagged with the configured payload format

        Raises:
            UnknownProfessionError: If the profession code is not known (no request is made)
            ApiTimeoutError: If the request exceeds the configured timeout
            RemoteApiError: If the API answers with a non-success status
            MalformedResponseError: If skills_by_palette is missing or ill-shaped
            TransportError: On any other network failure
        """
        operation = "fetch_profession"
        start = time.perf_counter()
        profession_name = get_profession_name(profession)
        if profession_name is None:
            error = UnknownProfessionError(profession, operation=operation)
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error

        url = self._url(GW2ApiConfig.PROFESSION_ENDPOINT.format(name=profession_name))
        headers = {HTTPHeaders.ACCEPT: ContentTypes.JSON}
        if self.settings.schema_version:
            headers[HTTPHeaders.SCHEMA_VERSION] = self.settings.schema_version

        data = await self._get_json(url, headers=headers, operation=operation)

        if not isinstance(data, dict) or not isinstance(
            data.get(APIFields.SKILLS_BY_PALETTE), list
        ):
            raise self._log_failure(
                MalformedResponseError(
                    url,
                    f"missing {APIFields.SKILLS_BY_PALETTE} array",
                    operation=operation,
                ),
            )

        payload_format = self.settings.payload_format
        try:
            entries = _PAYLOAD_PARSERS[payload_format](data[APIFields.SKILLS_BY_PALETTE])
        except ValueError as e:
            raise self._log_failure(
                MalformedResponseError(
                    url,
                    f"{APIFields.SKILLS_BY_PALETTE} is not in {payload_format.value} format ({e})",
                    operation=operation,
                    original_error=e,
                ),
            ) from e

        name = data.get(APIFields.NAME)
        payload = ProfessionPayload(
            profession=int(profession),
            name=name if isinstance(name, str) else profession_name,
            format=payload_format,
            entries=entries,
        )
        log_operation_success(
            logger=logger,
            operation=operation,
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"entries": len(entries), "format": payload_format.value},
            context={"profession": profession_name},
        )
        return payload

    async def fetch_skill(self, skill_id: int) -> SkillDetail:
        """Fetch skill details.

        Raises:
            InfrastructureError: Same contract as fetch_profession
        """
        return await self._fetch_detail(
            GW2ApiConfig.SKILL_ENDPOINT.format(skill_id=skill_id),
            SkillDetail,
            operation="fetch_skill",
        )

    async def fetch_specialization(self, spec_id: int) -> SpecializationDetail:
        """Fetch specialization details.

        Raises:
            InfrastructureError: Same contract as fetch_profession
        """
        return await self._fetch_detail(
            GW2ApiConfig.SPECIALIZATION_ENDPOINT.format(spec_id=spec_id),
            SpecializationDetail,
            operation="fetch_specialization",
        )

    async def fetch_pet(self, pet_id: int) -> PetDetail:
        """Fetch ranger pet details.

        Raises:
            InfrastructureError: Same contract as fetch_profession
        """
        return await self._fetch_detail(
            GW2ApiConfig.PET_ENDPOINT.format(pet_id=pet_id),
            PetDetail,
            operation="fetch_pet",
        )

    async def _fetch_detail(
        self,
        path: str,
        model: type[DetailT],
        operation: str,
    ) -> DetailT:
        url = self._url(path)
        data = await self._get_json(
            url,
            headers={HTTPHeaders.ACCEPT: ContentTypes.JSON},
            operation=operation,
        )

        if (
            not isinstance(data, dict)
            or isinstance(data.get(APIFields.ID), bool)
            or not isinstance(data.get(APIFields.ID), int)
            or not isinstance(data.get(APIFields.NAME), str)
        ):
            raise self._log_failure(
                MalformedResponseError(
                    url,
                    "expected an object with integer id and string name",
                    operation=operation,
                ),
            )

        try:
            return from_dict(model, data)
        except (KeyError, TypeError) as e:
            raise self._log_failure(
                MalformedResponseError(url, str(e), operation=operation, original_error=e),
            ) from e

    async def _get_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        operation: str,
    ) -> Any:
        """Issue one GET request bounded by the configured timeout.

        Expiry cancels the in-flight request and surfaces as ApiTimeoutError.
        """
        try:
            return await asyncio.wait_for(
                self._send(url, headers, operation),
                timeout=self.settings.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise self._log_failure(
                ApiTimeoutError(
                    url,
                    self.settings.timeout,
                    operation=operation,
                    original_error=e,
                ),
            ) from e
        except (aiohttp.ClientError, OSError) as e:
            raise self._log_failure(TransportError(url, e, operation=operation)) from e

    async def _send(self, url: str, headers: dict[str, str], operation: str) -> Any:
        start = time.perf_counter()
        session = self._get_session()
        async with session.get(url, headers=headers) as response:
            duration_ms = (time.perf_counter() - start) * 1000
            log_api_call(
                logger=logger,
                endpoint=url,
                status_code=response.status,
                duration_ms=duration_ms,
            )

            if not HTTPStatusCodes.is_success(response.status):
                raise self._log_failure(
                    RemoteApiError(
                        url,
                        response.status,
                        response.reason or "",
                        operation=operation,
                    ),
                )

            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise self._log_failure(
                    MalformedResponseError(
                        url,
                        "body is not valid JSON",
                        operation=operation,
                        original_error=e,
                    ),
                ) from e

    @staticmethod
    def _log_failure(error: InfrastructureError) -> InfrastructureError:
        log_operation_error(logger=logger, error=error, level=logging.WARNING)
        return error


__all__ = ["Gw2ApiClient"]
