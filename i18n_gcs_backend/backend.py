"""Backend facade: the read contract a localization framework drives.

A Backend is Uninitialized until init() receives bucket options, then
Initialized. Each init() starts a new epoch: the descriptor is rebuilt and
the bucket handle is dropped, to be reconnected lazily by the next read.

read() reports every outcome through its callback and never raises for
backend failures, so hosts can rely on the callback alone. read_file() is the
raising variant for direct callers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

import httpx

from i18n_gcs_backend.application.content_dispatcher import dispatch
from i18n_gcs_backend.application.interfaces import IHostServices, ReadCallback
from i18n_gcs_backend.application.path_resolver import resolve_object_key
from i18n_gcs_backend.core.config import (
    BackendOptions,
    EnvironmentOverrides,
    ParseFunction,
    build_configuration,
    verify_configuration,
)
from i18n_gcs_backend.domain.exceptions import NotInitializedError, ObjectNotFoundError
from i18n_gcs_backend.domain.value_objects import (
    ConnectionDescriptor,
    FetchStat,
    ReadResult,
)
from i18n_gcs_backend.infrastructure.gcs import BucketReference, connect, fetch
from i18n_gcs_backend.infrastructure.gcs._rest_client import create_http_client

logger = logging.getLogger(__name__)


class Backend:
    """Loads translation resources from a Cloud Storage bucket.

    Usage (host framework or direct)::

        backend = Backend(None, {"bucketName": "translations", "googleProject": "acme"})
        await backend.read("nb-NO", "common", callback)

    Args:
        services: Host capability bag; its interpolator (if any) expands load paths.
        options: BackendOptions or a mapping of options. None leaves the
            backend uninitialized until init() is called.
        http_client: Optional httpx.AsyncClient used for all store requests.
            When omitted the backend creates one on first connect and keeps it
            across epochs; aclose() releases it.
        environ: Optional environment snapshot (mapping) used instead of the
            process environment when merging overrides.
    """

    type: ClassVar[Literal["backend"]] = "backend"

    def __init__(
        self,
        services: IHostServices | None = None,
        options: BackendOptions | Mapping[str, Any] | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.services = services
        self.options = BackendOptions.coerce(options)
        self._http_client = http_client
        self._owns_http = http_client is None
        self._environ = environ
        self._descriptor: ConnectionDescriptor | None = None
        self._bucket: BucketReference | None = None
        self._bucket_task: asyncio.Task[BucketReference] | None = None
        if options is not None:
            self.init(services, options)

    @property
    def _log(self) -> logging.Logger:
        return self.options.logger or logger

    @property
    def initialized(self) -> bool:
        return self._descriptor is not None

    @property
    def descriptor(self) -> ConnectionDescriptor | None:
        """Verified configuration of the current epoch (None when uninitialized)."""
        return self._descriptor

    def init(
        self,
        services: IHostServices | None,
        options: BackendOptions | Mapping[str, Any],
    ) -> None:
        """(Re-)initialize with new options; no remote call is made.

        Raises:
            ConfigurationError: Bucket name or project missing from both the
                options and the environment.
        """
        self.options = BackendOptions.coerce(options)
        self.services = services
        self._log.debug(
            "Initializing GCS backend (load_path=%r, api_endpoint=%r)",
            self.options.load_path,
            self.options.api_endpoint,
        )

        self._descriptor = None
        self._bucket = None
        self._bucket_task = None
        overrides = (
            EnvironmentOverrides.from_environ(self._environ)
            if self._environ is not None
            else None
        )
        configuration = build_configuration(self.options, overrides)
        self._log.debug(
            "Built configuration: bucket=%s project=%s",
            configuration.bucket_name,
            configuration.google_project,
        )
        self._descriptor = verify_configuration(configuration)
        self._log.debug("Verified configuration for bucket %s", self._descriptor.bucket_name)

    async def get_bucket(self) -> BucketReference:
        """Return the bucket handle, connecting on first use in this epoch.

        Concurrent first callers share one connection attempt. A failed attempt
        is not remembered, so a later call connects again.

        Raises:
            NotInitializedError: init() has not succeeded.
            CredentialsError, BucketNotFoundError, RemoteStoreError: From connect().
        """
        if self._descriptor is None:
            raise NotInitializedError()
        if self._bucket is not None:
            return self._bucket

        task = self._bucket_task
        if task is None:
            self._log.debug("Fetching bucket: %s", self._descriptor.bucket_name)
            if self._http_client is None:
                self._http_client = create_http_client()
            task = asyncio.ensure_future(
                connect(self._descriptor, http_client=self._http_client)
            )
            self._bucket_task = task
        try:
            bucket = await asyncio.shield(task)
        except BaseException:
            if self._bucket_task is task and task.done():
                self._bucket_task = None
            raise
        # init() may have started a new epoch while we were connecting
        if self._bucket_task is task:
            self._bucket = bucket
        return bucket

    async def read_file(
        self,
        object_key: str,
        parse: ParseFunction | None = None,
    ) -> ReadResult:
        """Fetch and parse one object.

        Raises:
            NotInitializedError, CredentialsError, BucketNotFoundError,
            ObjectNotFoundError, RemoteStoreError, UnsupportedFormatError,
            ParseError.
        """
        bucket = await self.get_bucket()
        try:
            fetched = await fetch(bucket, object_key)
        except Exception:
            self._log.debug("Reading file from GCS failed: %s", object_key, exc_info=True)
            raise
        data = dispatch(object_key, fetched.raw_content, parse or self.options.parse)
        return ReadResult(data=data, stat=FetchStat(mtime=fetched.last_modified))

    async def read(self, language: str, namespace: str, callback: ReadCallback) -> None:
        """Load the resource for (language, namespace) and report through callback.

        callback(None, data) on success, callback(error, False) on any failure.
        Called exactly once. Exceptions raised by the callback itself propagate.
        """
        try:
            if self._descriptor is None:
                raise NotInitializedError()
            interpolator = getattr(self.services, "interpolator", None)
            object_key = await resolve_object_key(
                self.options.load_path, language, namespace, interpolator
            )
            result = await self.read_file(object_key)
        except Exception as e:
            level = logging.DEBUG if isinstance(e, ObjectNotFoundError) else logging.WARNING
            self._log.log(
                level, "Reading/processing %s/%s failed: %s", language, namespace, e
            )
            error: Exception | None = e
            data: Any = False
        else:
            self._log.debug("File read: %s", object_key)
            error = None
            data = result.data
        callback(error, data)

    async def aclose(self) -> None:
        """Drop the bucket handle and close the HTTP pool if the backend created it."""
        self._bucket = None
        self._bucket_task = None
        client = self._http_client
        if self._owns_http and client is not None:
            self._http_client = None
            await client.aclose()
