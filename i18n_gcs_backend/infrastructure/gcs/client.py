"""Remote store gateway for Cloud Storage.

connect() turns a verified ConnectionDescriptor into a BucketReference after
loading credentials and checking that the bucket exists. fetch() reads one
object. Both translate google-auth and httpx failures into domain errors so
callers can tell a missing object from a transport failure.
"""

import asyncio
import json
import logging

import aiofiles
import httpx
from google.auth.exceptions import DefaultCredentialsError, GoogleAuthError

from i18n_gcs_backend.domain.exceptions import (
    BucketNotFoundError,
    CredentialsError,
    ObjectNotFoundError,
    RemoteStoreError,
)
from i18n_gcs_backend.domain.value_objects import ConnectionDescriptor, FetchResult
from i18n_gcs_backend.infrastructure.gcs._rest_client import (
    BlobReference,
    BucketReference,
    GCSRESTClient,
    _get_credentials,
    _get_default_credentials,
)
from i18n_gcs_backend.shared.enums import CredentialsErrorKind
from i18n_gcs_backend.shared.utils.datetime import parse_rfc3339_utc, utc_now

logger = logging.getLogger(__name__)


async def load_credentials(path: str):
    """Load service account credentials from a JSON key file.

    Raises:
        CredentialsError: File missing (not_found) or not a valid
            service account JSON document (malformed).
    """
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            key_dict = json.loads(await f.read())
    except FileNotFoundError as e:
        raise CredentialsError(path, CredentialsErrorKind.NOT_FOUND) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CredentialsError(path, CredentialsErrorKind.MALFORMED) from e
    if not isinstance(key_dict, dict):
        raise CredentialsError(path, CredentialsErrorKind.MALFORMED)
    try:
        return _get_credentials(key_dict)
    except (ValueError, KeyError) as e:
        raise CredentialsError(path, CredentialsErrorKind.MALFORMED) from e


async def _resolve_credentials(descriptor: ConnectionDescriptor):
    """Credentials for a descriptor; None means anonymous (endpoint override only)."""
    if descriptor.google_application_credentials_path:
        return await load_credentials(descriptor.google_application_credentials_path)
    if descriptor.api_endpoint:
        return None
    try:
        return await asyncio.to_thread(_get_default_credentials)
    except DefaultCredentialsError as e:
        raise CredentialsError(None, CredentialsErrorKind.UNAVAILABLE) from e


async def connect(
    descriptor: ConnectionDescriptor,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> BucketReference:
    """Get a reference to the configured bucket and verify that it exists.

    Args:
        descriptor: Verified connection configuration.
        http_client: Optional injected client (tests, shared pools).

    Returns:
        BucketReference for descriptor.bucket_name.

    Raises:
        CredentialsError: Credentials could not be loaded.
        BucketNotFoundError: The bucket does not exist.
        RemoteStoreError: Transport or HTTP failure other than 404.
    """
    credentials = await _resolve_credentials(descriptor)

    # api_endpoint is None in project mode (default endpoint)
    client = GCSRESTClient(
        credentials,
        api_endpoint=descriptor.api_endpoint,
        http_client=http_client,
    )

    bucket = client.bucket(descriptor.bucket_name)
    try:
        bucket_exists = await bucket.exists()
    except (httpx.HTTPError, GoogleAuthError) as e:
        await client.aclose()
        raise RemoteStoreError(str(e), bucket=descriptor.bucket_name) from e
    if not bucket_exists:
        await client.aclose()
        raise BucketNotFoundError(descriptor.bucket_name)

    logger.debug(
        "Connected to bucket %s at %s (project %s)",
        bucket.name,
        client.base_url,
        descriptor.google_project,
    )
    return bucket


def construct_file_reference(bucket: BucketReference, object_key: str) -> BlobReference:
    return bucket.blob(object_key)


async def file_exists(blob: BlobReference) -> bool:
    """Return True if the object exists in its bucket."""
    try:
        return await blob.exists()
    except (httpx.HTTPError, GoogleAuthError) as e:
        raise RemoteStoreError(
            str(e), bucket=blob.bucket.name, object_key=blob.name
        ) from e


async def fetch(bucket: BucketReference, object_key: str) -> FetchResult:
    """Read an object's content and modification time.

    Raises:
        ObjectNotFoundError: The object does not exist.
        RemoteStoreError: Transport or HTTP failure other than 404.
    """
    blob = construct_file_reference(bucket, object_key)
    try:
        metadata = await blob.get_metadata()
        if metadata is None:
            raise ObjectNotFoundError(bucket.name, object_key)
        data = await blob.download()
    except (httpx.HTTPError, GoogleAuthError) as e:
        raise RemoteStoreError(str(e), bucket=bucket.name, object_key=object_key) from e
    # Deleted between the metadata and media requests
    if data is None:
        raise ObjectNotFoundError(bucket.name, object_key)

    timestamp = metadata.get("updated") or metadata.get("timeCreated")
    try:
        last_modified = parse_rfc3339_utc(timestamp) if timestamp else utc_now()
    except ValueError:
        logger.warning("Unparseable timestamp %r on %s", timestamp, object_key)
        last_modified = utc_now()

    return FetchResult(
        raw_content=data.decode("utf-8", errors="replace"),
        last_modified=last_modified,
    )
