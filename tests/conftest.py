import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_fflv_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("FFLV_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FFLV_CACHE_DIR", str(tmp_path / "cache"))


@pytest.fixture(autouse=True)
def block_external_http(monkeypatch: pytest.MonkeyPatch) -> None:
    import httpx

    _original_send = httpx.AsyncClient.send

    async def _deny_unmocked_http(self, request, *args, **kwargs):
        if isinstance(self._transport, httpx.MockTransport):
            return await _original_send(self, request, *args, **kwargs)
        raise RuntimeError(f"External HTTP disabled during tests: {request.url}")

    monkeypatch.setattr(httpx.AsyncClient, "send", _deny_unmocked_http)
