"""Pytest configuration and fixtures for the GCS backend.

The remote store is an in-process fake of the Cloud Storage JSON API served
through httpx.MockTransport, so no test touches the network.
"""

import json
from urllib.parse import unquote

import httpx
import pytest
from tenacity import wait_none

from i18n_gcs_backend.core.constants import (
    ENV_BUCKET_NAME,
    ENV_CREDENTIALS_PATH,
    ENV_PROJECT,
)
from i18n_gcs_backend.infrastructure.gcs._rest_client import _request_async

TEST_BUCKET = "test-bucket"
TEST_PROJECT = "test-project"
TEST_ENDPOINT = "http://fake-gcs.test"

TIME_CREATED = "2024-05-01T10:00:00.000Z"
UPDATED = "2024-05-02T12:30:00.000Z"


class FakeGCSServer:
    """Minimal Cloud Storage JSON API: bucket get, object get, object media."""

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        # Number of requests answered with fail_with; None fails every request
        self.fail_times: int | None = None

    def add_bucket(self, name: str) -> None:
        self.buckets.setdefault(name, {})

    def add_object(self, bucket: str, name: str, content: bytes | str) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.add_bucket(bucket)
        self.buckets[bucket][name] = content

    def bucket_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if b"/o/" not in r.url.raw_path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None and self.fail_times != 0:
            if self.fail_times is not None:
                self.fail_times -= 1
            return httpx.Response(
                self.fail_with, json={"error": {"code": self.fail_with, "message": "boom"}}
            )

        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        prefix = "/storage/v1/b/"
        if not path.startswith(prefix):
            return httpx.Response(404, json={"error": {"code": 404}})
        bucket_part, sep, object_part = path[len(prefix):].partition("/o/")
        bucket = unquote(bucket_part)
        if bucket not in self.buckets:
            return httpx.Response(404, json={"error": {"code": 404, "message": "Not Found"}})
        if not sep:
            return httpx.Response(200, json={"kind": "storage#bucket", "name": bucket})

        name = unquote(object_part)
        objects = self.buckets[bucket]
        if name not in objects:
            return httpx.Response(404, json={"error": {"code": 404, "message": "Not Found"}})
        if request.url.params.get("alt") == "media":
            return httpx.Response(200, content=objects[name])
        return httpx.Response(
            200,
            json={
                "kind": "storage#object",
                "name": name,
                "bucket": bucket,
                "size": str(len(objects[name])),
                "timeCreated": TIME_CREATED,
                "updated": UPDATED,
            },
        )


class StaticInterpolator:
    """Host interpolator double that ignores the template and returns "{lng}.{ext}"."""

    def __init__(self, extension: str = "json") -> None:
        self.extension = extension
        self.calls: list[tuple[str, dict, str]] = []

    def interpolate(self, template, data, language, options) -> str:
        self.calls.append((template, data, language))
        return f"{language}.{self.extension}"


class StaticServices:
    def __init__(self, interpolator) -> None:
        self.interpolator = interpolator


@pytest.fixture(autouse=True)
def clean_backend_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep BACKEND_* variables from the developer's shell out of every test."""
    for var in (ENV_BUCKET_NAME, ENV_PROJECT, ENV_CREDENTIALS_PATH):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_gcs() -> FakeGCSServer:
    """Fake store with the translation fixtures used across tests."""
    server = FakeGCSServer()
    server.add_object(TEST_BUCKET, "nb-NO.json", json.dumps({"hello": "Hei"}))
    server.add_object(TEST_BUCKET, "somepath/en-US.json", json.dumps({"hello": "Hello"}))
    server.add_object(TEST_BUCKET, "de-DE.json", '{"hello": "Hallo",')
    server.add_object(TEST_BUCKET, "nb-NO.bar", json.dumps({"hello": "Hei"}))
    server.add_object(
        TEST_BUCKET, "sv-SV/backend.json", json.dumps({"greeting": {"hello": "Hej"}})
    )
    return server


@pytest.fixture
async def http_client(fake_gcs: FakeGCSServer) -> httpx.AsyncClient:
    """httpx client routed to the fake store."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_gcs.handler)) as client:
        yield client


@pytest.fixture
def backend_options() -> dict:
    """i18next-style options pointing at the fake endpoint."""
    return {
        "bucketName": TEST_BUCKET,
        "googleProject": TEST_PROJECT,
        "apiEndpoint": TEST_ENDPOINT,
        "loadPath": "",
    }


@pytest.fixture
def static_services():
    """Factory for host services whose interpolator returns "{lng}.{extension}"."""

    def _make(extension: str = "json") -> StaticServices:
        return StaticServices(StaticInterpolator(extension))

    return _make


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch: pytest.MonkeyPatch) -> None:
    """Retry transient store failures without backoff sleeps."""
    monkeypatch.setattr(_request_async.retry, "wait", wait_none())
