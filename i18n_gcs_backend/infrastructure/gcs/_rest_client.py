"""Thin Cloud Storage JSON API client (no google-cloud-storage).

Uses google-auth for service account / application default tokens and the
GCS JSON API v1 for the read-only operations the backend needs: bucket
existence, object metadata and object media. All HTTP calls use
httpx.AsyncClient so they do not block the event loop. Transient failures
(transport errors, 408, 429 and 5xx) are retried with exponential backoff.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from i18n_gcs_backend.core.constants import (
    GCS_API_PATH,
    GCS_DEFAULT_ENDPOINT,
    GCS_MAX_RETRIES,
    GCS_READ_ONLY_SCOPE,
    GCS_RETRY_MAX_WAIT_SECONDS,
    GCS_RETRYABLE_STATUS_CODES,
    GCS_TIMEOUT_SECONDS,
)


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Cloud Storage."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[GCS_READ_ONLY_SCOPE]
    )


def _get_default_credentials():
    """Return application default credentials (blocking; run in a thread)."""
    import google.auth

    credentials, _ = google.auth.default(scopes=[GCS_READ_ONLY_SCOPE])
    return credentials


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _is_transient(exc: BaseException) -> bool:
    """True for failures worth retrying: transport errors, 408, 429 and 5xx."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status in GCS_RETRYABLE_STATUS_CODES or status >= 500
    return False


@retry(
    reraise=True,
    stop=stop_after_attempt(GCS_MAX_RETRIES + 1),
    wait=wait_exponential(multiplier=0.5, max=GCS_RETRY_MAX_WAIT_SECONDS),
    retry=retry_if_exception(_is_transient),
)
async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, str] | None = None,
    access_token: str | None = None,
) -> httpx.Response | None:
    """Perform an async GET against the JSON API. 404 returns None.

    Transient failures are retried up to GCS_MAX_RETRIES times; the last
    error is re-raised once attempts are exhausted.
    """
    headers = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    resp = await client.get(url, params=params, headers=headers)
    if resp.status_code == 404:
        return None
    resp.raise_for_status()
    return resp


def create_http_client() -> httpx.AsyncClient:
    """Pooled HTTP client for JSON API requests."""
    return httpx.AsyncClient(timeout=GCS_TIMEOUT_SECONDS)


class BlobReference:
    """Reference to a single object in a bucket."""

    def __init__(self, bucket: "BucketReference", name: str):
        self.bucket = bucket
        self.name = name

    @property
    def _url(self) -> str:
        return f"{self.bucket._url}/o/{quote(self.name, safe='')}"

    async def exists(self) -> bool:
        """Return True if the object exists."""
        return await self.get_metadata() is not None

    async def get_metadata(self) -> dict[str, Any] | None:
        """Fetch the object resource (name, size, timeCreated, updated...); None if missing."""
        client = self.bucket.client
        resp = await _request_async(
            client._http, self._url, access_token=await client.get_token()
        )
        if resp is None:
            return None
        return resp.json()

    async def download(self) -> bytes | None:
        """Fetch the object media; None if missing."""
        client = self.bucket.client
        resp = await _request_async(
            client._http,
            self._url,
            params={"alt": "media"},
            access_token=await client.get_token(),
        )
        if resp is None:
            return None
        return resp.content


class BucketReference:
    """Reference to a bucket; the opaque handle the backend memoizes."""

    def __init__(self, client: "GCSRESTClient", name: str):
        self.client = client
        self.name = name

    @property
    def _url(self) -> str:
        return f"{self.client.base_url}/b/{quote(self.name, safe='')}"

    async def exists(self) -> bool:
        """Return True if the bucket exists."""
        resp = await _request_async(
            self.client._http, self._url, access_token=await self.client.get_token()
        )
        return resp is not None

    def blob(self, name: str) -> BlobReference:
        return BlobReference(self, name)


class GCSRESTClient:
    """Lightweight Cloud Storage client using the JSON API.

    Talks to the default endpoint (authenticated) or to an alternate
    api_endpoint such as an emulator. credentials=None sends anonymous
    requests.
    """

    def __init__(
        self,
        credentials,
        *,
        api_endpoint: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credentials = credentials
        endpoint = (api_endpoint or GCS_DEFAULT_ENDPOINT).rstrip("/")
        self.base_url = f"{endpoint}{GCS_API_PATH}"
        self._http = http_client if http_client is not None else create_http_client()
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token, or None for anonymous access.

        Refreshes in the thread pool to avoid blocking.
        """
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def bucket(self, name: str) -> BucketReference:
        return BucketReference(self, name)
