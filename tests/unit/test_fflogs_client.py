import asyncio
import json
import sys
import tempfile
from pathlib import Path
import unittest

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.metric import DEFAULT_METRIC, resolve_metric
from fflogs_viewer.infrastructure.fflogs_client import FFLogsClient, ZoneQuery, build_character_query
from fflogs_viewer.infrastructure.response_cache import FileResponseCache


TOKEN_URL = "https://fflogs.test/oauth/token"
API_URL = "https://fflogs.test/api/v2/client"

CHARACTER_BODY = {"data": {"characterData": {"character": {"hidden": False}}}}


def _character() -> CharacterIdentity:
    return CharacterIdentity(first_name="Jane", last_name="Doe", world_name="Gilgamesh", region_name="NA")


class _ApiStub:
    def __init__(self, *, token_status: int = 200, api_status: int = 200, api_body=None) -> None:
        self.token_status = token_status
        self.api_status = api_status
        self.api_body = CHARACTER_BODY if api_body is None else api_body
        self.token_calls = 0
        self.queries: list[str] = []
        self.auth_headers: list[str] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.token_calls += 1
            # Let other pending fetches run while the token is in flight.
            await asyncio.sleep(0)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(200, json={"access_token": f"token-{self.token_calls}", "token_type": "Bearer"})

        self.queries.append(json.loads(request.content)["query"])
        self.auth_headers.append(request.headers.get("Authorization", ""))
        if isinstance(self.api_body, str):
            return httpx.Response(self.api_status, text=self.api_body)
        return httpx.Response(self.api_status, json=self.api_body)


def _client(stub: _ApiStub, *, cache: FileResponseCache | None = None, **kwargs) -> FFLogsClient:
    return FFLogsClient(
        client_id=kwargs.pop("client_id", "id"),
        client_secret=kwargs.pop("client_secret", "secret"),
        api_url=API_URL,
        token_url=TOKEN_URL,
        cache=cache,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(stub)),
        **kwargs,
    )


class BuildCharacterQueryTests(unittest.TestCase):
    def test_query_names_character_and_aliases_each_zone(self) -> None:
        query = build_character_query(
            _character(),
            resolve_metric("ndps"),
            (ZoneQuery(49, 101), ZoneQuery(53, 100)),
        )

        self.assertIn('name: "Jane Doe"', query)
        self.assertIn('serverSlug: "Gilgamesh"', query)
        self.assertIn('serverRegion: "NA"', query)
        self.assertIn("zone49diff101: zoneRankings(zoneID: 49, difficulty: 101, metric: ndps)", query)
        self.assertIn("zone53diff100: zoneRankings(zoneID: 53, difficulty: 100, metric: ndps)", query)
        self.assertIn("hidden", query)


class FFLogsClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_requests_token_then_queries_with_bearer(self) -> None:
        stub = _ApiStub()
        client = _client(stub)

        payload = await client.fetch(_character(), DEFAULT_METRIC)
        await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertEqual(CHARACTER_BODY, payload)
        self.assertEqual(1, stub.token_calls)
        self.assertEqual(["Bearer token-1", "Bearer token-1"], stub.auth_headers)
        self.assertIn("metric: rdps", stub.queries[0])

    async def test_concurrent_fetches_share_one_token_request(self) -> None:
        stub = _ApiStub()
        client = _client(stub)
        other = CharacterIdentity(first_name="John", last_name="Roe", world_name="Omega", region_name="EU")

        await asyncio.gather(
            client.fetch(_character(), DEFAULT_METRIC),
            client.fetch(other, DEFAULT_METRIC),
            client.fetch(_character(), resolve_metric("hps")),
        )
        await client.close()

        self.assertEqual(1, stub.token_calls)
        self.assertEqual(["Bearer token-1"] * 3, stub.auth_headers)

    async def test_missing_credentials_answer_unauthenticated(self) -> None:
        stub = _ApiStub()
        client = _client(stub, client_id="", client_secret="")

        payload = await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertEqual({"error": "Unauthenticated."}, payload)
        self.assertEqual(0, stub.token_calls)
        self.assertEqual([], stub.queries)

    async def test_rejected_token_answers_unauthenticated(self) -> None:
        stub = _ApiStub(token_status=401)
        client = _client(stub)

        with self.assertLogs("fflogs_viewer.infrastructure.fflogs_client", level="WARNING"):
            payload = await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertEqual({"error": "Unauthenticated."}, payload)

    async def test_rate_limit_status_is_copied_into_payload(self) -> None:
        stub = _ApiStub(api_status=429, api_body={"error": "Too many requests"})
        client = _client(stub)

        payload = await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertEqual(429, payload["status"])

    async def test_non_json_body_is_none(self) -> None:
        stub = _ApiStub(api_status=502, api_body="<html>bad gateway</html>")
        client = _client(stub)

        payload = await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertIsNone(payload)

    async def test_unauthorized_response_drops_token(self) -> None:
        stub = _ApiStub(api_status=401, api_body={"error": "Unauthenticated."})
        client = _client(stub)

        await client.fetch(_character(), DEFAULT_METRIC)
        await client.fetch(_character(), DEFAULT_METRIC)
        await client.close()

        self.assertEqual(2, stub.token_calls)

    async def test_cache_serves_repeat_fetch_until_invalidated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            stub = _ApiStub()
            client = _client(stub, cache=FileResponseCache(tmp))

            first = await client.fetch(_character(), DEFAULT_METRIC)
            second = await client.fetch(_character(), DEFAULT_METRIC)
            self.assertEqual(first, second)
            self.assertEqual(1, len(stub.queries))

            client.invalidate(_character(), DEFAULT_METRIC)
            await client.fetch(_character(), DEFAULT_METRIC)
            await client.close()

            self.assertEqual(2, len(stub.queries))

    async def test_cache_key_separates_metrics(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            stub = _ApiStub()
            client = _client(stub, cache=FileResponseCache(tmp))

            await client.fetch(_character(), DEFAULT_METRIC)
            await client.fetch(_character(), resolve_metric("adps"))
            await client.close()

            self.assertEqual(2, len(stub.queries))
            self.assertNotEqual(
                FFLogsClient.cache_key(_character(), DEFAULT_METRIC),
                FFLogsClient.cache_key(_character(), resolve_metric("adps")),
            )

    async def test_cache_key_ignores_name_case(self) -> None:
        upper = CharacterIdentity(first_name="JANE", last_name="DOE", world_name="GILGAMESH")
        self.assertEqual(
            FFLogsClient.cache_key(_character(), DEFAULT_METRIC),
            FFLogsClient.cache_key(upper, DEFAULT_METRIC),
        )


if __name__ == "__main__":
    unittest.main()
