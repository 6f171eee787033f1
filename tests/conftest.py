"""Pytest configuration and shared fixtures for repository test runs."""

from __future__ import annotations

import asyncio
import base64
import hashlib
import json
import sys
from pathlib import Path
from typing import Any, Callable, Iterator

import httpx
import pytest

_SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from core.config import StoreConfig  # noqa: E402
from store.file_store import FileStoreClient  # noqa: E402

OWNER = "a"
REPO = "b"
TOKEN = "t"
API_URL = "https://api.example.test"


class FakeContentsHost:
    """In-memory contents API enforcing the sha precondition on updates."""

    def __init__(self, owner: str = OWNER, repo: str = REPO, token: str = TOKEN) -> None:
        self._prefix = f"/repos/{owner}/{repo}/contents/"
        self._token = token
        self.files: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.requests: list[httpx.Request] = []
        self.put_bodies: list[dict[str, Any]] = []
        self.forced_responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self.before_put: Callable[[], None] | None = None

    def seed_raw(self, path: str, raw: bytes, branch: str = "main") -> str:
        sha = _blob_sha(raw)
        self.files[(branch, path)] = (raw, sha)
        return sha

    def seed(self, path: str, value: Any, branch: str = "main") -> str:
        return self.seed_raw(path, json.dumps(value).encode("utf-8"), branch)

    def stored_value(self, path: str, branch: str = "main") -> Any:
        raw, _ = self.files[(branch, path)]
        return json.loads(raw.decode("utf-8"))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"token {self._token}":
            return httpx.Response(401, json={"message": "Bad credentials"})
        if not request.url.path.startswith(self._prefix):
            return httpx.Response(404, json={"message": "Not Found"})
        path = request.url.path[len(self._prefix):]
        forced = self.forced_responses.get((request.method, path))
        if forced is not None:
            status_code, payload = forced
            if isinstance(payload, (bytes, str)):
                return httpx.Response(status_code, content=payload)
            return httpx.Response(status_code, json=payload)
        if request.method == "GET":
            return self._handle_get(request, path)
        if request.method == "PUT":
            return self._handle_put(request, path)
        return httpx.Response(405, json={"message": "Method Not Allowed"})

    def _handle_get(self, request: httpx.Request, path: str) -> httpx.Response:
        branch = request.url.params.get("ref", "main")
        stored = self.files.get((branch, path))
        if stored is None:
            return httpx.Response(404, json={"message": "Not Found"})
        raw, sha = stored
        encoded = base64.b64encode(raw).decode("ascii")
        wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
        return httpx.Response(
            200,
            json={"type": "file", "encoding": "base64", "path": path, "sha": sha, "content": wrapped + "\n"},
        )

    def _handle_put(self, request: httpx.Request, path: str) -> httpx.Response:
        if self.before_put is not None:
            self.before_put()
        body = json.loads(request.content)
        self.put_bodies.append(body)
        branch = body.get("branch", "main")
        stored = self.files.get((branch, path))
        if stored is not None and "sha" not in body:
            return httpx.Response(422, json={"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
        if stored is not None and body["sha"] != stored[1]:
            return httpx.Response(409, json={"message": f"{path} does not match {body['sha']}"})
        if stored is None and "sha" in body:
            return httpx.Response(409, json={"message": f"{path} does not match {body['sha']}"})
        raw = base64.b64decode(body["content"])
        sha = self.seed_raw(path, raw, branch)
        status = 201 if stored is None else 200
        return httpx.Response(status, json={"content": {"path": path, "sha": sha}, "commit": {"message": body["message"]}})


def _blob_sha(raw: bytes) -> str:
    return hashlib.sha1(b"blob %d\0" % len(raw) + raw).hexdigest()


@pytest.fixture
def fake_host() -> FakeContentsHost:
    return FakeContentsHost()


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(owner=OWNER, repo=REPO, token=TOKEN, branch="main", api_url=API_URL)


@pytest.fixture
def http_client(fake_host: FakeContentsHost) -> Iterator[httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_host.handle))
    yield client
    # Shared by sync CLI tests, so close outside any test event loop.
    asyncio.run(client.aclose())


@pytest.fixture
def store_client(http_client: httpx.AsyncClient) -> FileStoreClient:
    return FileStoreClient(http_client=http_client)
