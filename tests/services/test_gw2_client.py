"""Tests for Gw2ApiClient request handling and error mapping."""

from __future__ import annotations

import logging

import aiohttp
import pytest

from gw2palette.config import PaletteMapperSettings
from gw2palette.services import Gw2ApiClient
from gw2palette.shared.errors import (
    ApiTimeoutError,
    ErrorCode,
    InfrastructureError,
    MalformedResponseError,
    RemoteApiError,
    TransportError,
    UnknownProfessionError,
)
from gw2palette.shared.models import PayloadFormat
from tests.helpers import API_URL, GUARDIAN_RESPONSE, GUARDIAN_URL, FakeResponse, FakeSession


def _client(fake_session: FakeSession, **options: object) -> Gw2ApiClient:
    settings = PaletteMapperSettings(timeout=200, **options)  # type: ignore[arg-type]
    return Gw2ApiClient(settings, session=fake_session)  # type: ignore[arg-type]


class TestFetchProfession:
    """fetch_profession request and parsing."""

    @pytest.mark.asyncio
    async def test_requests_pairs_schema(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add_json(GUARDIAN_URL, GUARDIAN_RESPONSE)

        payload = await client.fetch_profession(1)

        url, headers = fake_session.requests[0]
        assert url == GUARDIAN_URL
        assert headers["Accept"] == "application/json"
        assert headers["X-Schema-Version"] == "2019-12-19T00:00:00.000Z"
        assert payload.format is PayloadFormat.PAIRS
        assert payload.name == "Guardian"
        assert payload.entries == ((1, 12343), (2, 12417), (3, 12371), (999, None))

    @pytest.mark.asyncio
    async def test_dense_format_without_schema_header(self, fake_session: FakeSession) -> None:
        fake_session.add_json(
            GUARDIAN_URL,
            {"name": "Guardian", "skills_by_palette": [0, 12343, None, 12371]},
        )
        client = _client(fake_session, payload_format="dense", schema_version=None)

        payload = await client.fetch_profession(1)

        assert "X-Schema-Version" not in fake_session.requests[0][1]
        assert payload.format is PayloadFormat.DENSE
        assert payload.entries == ((0, 0), (1, 12343), (2, None), (3, 12371))

    @pytest.mark.asyncio
    async def test_name_falls_back_to_profession_table(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add_json(GUARDIAN_URL, {"skills_by_palette": [[1, 12343]]})

        payload = await client.fetch_profession(1)

        assert payload.name == "Guardian"
        assert payload.profession == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("profession", [0, 10, -1, 42])
    async def test_unknown_profession_rejected_before_request(
        self, client: Gw2ApiClient, fake_session: FakeSession, profession: int
    ) -> None:
        with pytest.raises(UnknownProfessionError) as exc_info:
            await client.fetch_profession(profession)

        assert exc_info.value.code == ErrorCode.UNKNOWN_PROFESSION
        assert exc_info.value.profession == profession
        assert fake_session.request_count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "Guardian"},
            {"name": "Guardian", "skills_by_palette": {"1": 12343}},
            {"name": "Guardian", "skills_by_palette": None},
            [[1, 12343]],
            "Guardian",
        ],
        ids=["missing", "object", "null", "top-level-array", "string"],
    )
    async def test_missing_palette_array_is_malformed(
        self, client: Gw2ApiClient, fake_session: FakeSession, body: object
    ) -> None:
        fake_session.add_json(GUARDIAN_URL, body)

        with pytest.raises(MalformedResponseError, match="missing skills_by_palette array"):
            await client.fetch_profession(1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entries",
        [
            [[1]],
            [[1, 2, 3]],
            [12343],
            [["1", 12343]],
            [[1, "12343"]],
            [[True, 12343]],
            [[-1, 12343]],
            [[None, 12343]],
        ],
    )
    async def test_ill_shaped_pairs_are_malformed(
        self, client: Gw2ApiClient, fake_session: FakeSession, entries: list
    ) -> None:
        fake_session.add_json(GUARDIAN_URL, {"skills_by_palette": entries})

        with pytest.raises(MalformedResponseError) as exc_info:
            await client.fetch_profession(1)

        assert "pairs format" in exc_info.value.reason
        assert isinstance(exc_info.value.original_error, ValueError)

    @pytest.mark.asyncio
    async def test_pairs_in_dense_mode_are_malformed(self, fake_session: FakeSession) -> None:
        fake_session.add_json(GUARDIAN_URL, GUARDIAN_RESPONSE)
        client = _client(fake_session, payload_format="dense")

        with pytest.raises(MalformedResponseError, match="dense format"):
            await client.fetch_profession(1)

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add(GUARDIAN_URL, FakeResponse(raw="<html>maintenance</html>"))

        with pytest.raises(MalformedResponseError, match="body is not valid JSON"):
            await client.fetch_profession(1)

    @pytest.mark.asyncio
    async def test_success_log_reports_elapsed_time(
        self, client: Gw2ApiClient, fake_session: FakeSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        fake_session.add(GUARDIAN_URL, FakeResponse(body=GUARDIAN_RESPONSE, delay=0.02))

        with caplog.at_level(logging.DEBUG, logger="gw2palette.services.gw2_client"):
            await client.fetch_profession(1)

        (record,) = [
            r
            for r in caplog.records
            if getattr(r, "operation", None) == "fetch_profession" and hasattr(r, "duration_ms")
        ]
        assert record.duration_ms >= 15
        assert record.result_info == {"entries": 4, "format": "pairs"}


class TestErrorMapping:
    """Failures surface as distinct InfrastructureError subclasses."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "reason"),
        [(404, "Not Found"), (429, "Too Many Requests"), (500, "Internal Server Error")],
    )
    async def test_non_success_status(
        self, client: Gw2ApiClient, fake_session: FakeSession, status: int, reason: str
    ) -> None:
        fake_session.add(GUARDIAN_URL, FakeResponse(status=status, reason=reason))

        with pytest.raises(RemoteApiError) as exc_info:
            await client.fetch_profession(1)

        error = exc_info.value
        assert error.status == status
        assert error.status_text == reason
        assert error.url == GUARDIAN_URL
        assert str(error) == f"API_REMOTE_ERROR: GW2 API error: {status} {reason}"

    @pytest.mark.asyncio
    async def test_timeout(self, client: Gw2ApiClient, fake_session: FakeSession) -> None:
        fake_session.add(GUARDIAN_URL, FakeResponse(body=GUARDIAN_RESPONSE, delay=5))

        with pytest.raises(ApiTimeoutError) as exc_info:
            await client.fetch_profession(1)

        error = exc_info.value
        assert not isinstance(error, TransportError)
        assert error.timeout_ms == 200
        assert error.message == "GW2 API request timeout after 200ms"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            aiohttp.ClientConnectionError("connection refused"),
            aiohttp.ServerDisconnectedError(),
            ConnectionResetError("reset by peer"),
        ],
    )
    async def test_transport_failure(
        self, client: Gw2ApiClient, fake_session: FakeSession, failure: BaseException
    ) -> None:
        fake_session.add(GUARDIAN_URL, FakeResponse(error=failure))

        with pytest.raises(TransportError) as exc_info:
            await client.fetch_profession(1)

        assert exc_info.value.original_error is failure
        assert exc_info.value.__cause__ is failure

    @pytest.mark.asyncio
    async def test_all_failures_are_infrastructure_errors(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add(
            GUARDIAN_URL,
            FakeResponse(status=503, reason="Service Unavailable"),
            FakeResponse(raw="{"),
            FakeResponse(error=aiohttp.ClientOSError()),
            FakeResponse(delay=5),
        )

        for _ in range(4):
            with pytest.raises(InfrastructureError):
                await client.fetch_profession(1)

        assert fake_session.request_count(GUARDIAN_URL) == 4


class TestFetchDetails:
    """Skill, specialization and pet endpoints."""

    @pytest.mark.asyncio
    async def test_fetch_skill_ignores_unknown_fields(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add_json(
            f"{API_URL}/v2/skills/14401",
            {"id": 14401, "name": "Mending", "facts": [{"type": "Heal"}]},
        )

        skill = await client.fetch_skill(14401)

        assert skill.id == 14401
        assert skill.name == "Mending"
        assert skill.professions == []
        assert "X-Schema-Version" not in fake_session.requests[0][1]

    @pytest.mark.asyncio
    async def test_fetch_specialization(
        self, client: Gw2ApiClient, fake_session: FakeSession
    ) -> None:
        fake_session.add_json(
            f"{API_URL}/v2/specializations/18",
            {"id": 18, "name": "Berserker", "profession": "Warrior", "elite": True},
        )

        spec = await client.fetch_specialization(18)

        assert spec.name == "Berserker"
        assert spec.elite is True

    @pytest.mark.asyncio
    async def test_fetch_pet(self, client: Gw2ApiClient, fake_session: FakeSession) -> None:
        fake_session.add_json(f"{API_URL}/v2/pets/3", {"id": 3, "name": "Juvenile Krytan Drakehound"})

        pet = await client.fetch_pet(3)

        assert pet.id == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "no id"},
            {"id": "12", "name": "string id"},
            {"id": True, "name": "bool id"},
            {"id": 12},
            [],
        ],
    )
    async def test_malformed_detail(
        self, client: Gw2ApiClient, fake_session: FakeSession, body: object
    ) -> None:
        fake_session.add_json(f"{API_URL}/v2/pets/12", body)

        with pytest.raises(MalformedResponseError):
            await client.fetch_pet(12)

    @pytest.mark.asyncio
    async def test_detail_not_found(self, client: Gw2ApiClient) -> None:
        with pytest.raises(RemoteApiError) as exc_info:
            await client.fetch_skill(1)

        assert exc_info.value.status == 404


class TestSessionLifecycle:
    """Session ownership."""

    @pytest.mark.asyncio
    async def test_injected_session_is_not_closed(self, fake_session: FakeSession) -> None:
        async with _client(fake_session):
            pass

        assert fake_session.closed is False

    @pytest.mark.asyncio
    async def test_owned_session_is_created_lazily_and_closed(self) -> None:
        client = Gw2ApiClient()
        assert client._session is None

        session = client._get_session()
        assert isinstance(session, aiohttp.ClientSession)
        assert client._get_session() is session

        await client.close()
        assert session.closed
        assert client._session is None
