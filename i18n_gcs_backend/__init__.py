"""i18n-gcs-backend: load translation resources from Google Cloud Storage.

A backend for i18next-style localization frameworks. The host calls
``read(language, namespace, callback)``; the backend resolves the object key
from its load path, fetches the object from the configured bucket, parses it
and reports ``(None, data)`` or ``(error, False)`` through the callback.

Quick Start:
    ```python
    from i18n_gcs_backend import Backend, HostServices, TemplateInterpolator

    backend = Backend(
        HostServices(interpolator=TemplateInterpolator()),
        {"bucketName": "translations", "googleProject": "acme"},
    )
    await backend.read("nb-NO", "common", lambda err, data: ...)
    ```

Bucket, project and credentials path may also come from the
BACKEND_GCP_BUCKET_NAME, BACKEND_GCP_PROJECT and
BACKEND_GOOGLE_APPLICATION_CREDENTIALS_PATH environment variables, which take
precedence over options.
"""

from i18n_gcs_backend.application import (
    HostServices,
    IHostServices,
    IInterpolator,
    ReadCallback,
    TemplateInterpolator,
)
from i18n_gcs_backend.backend import Backend
from i18n_gcs_backend.core.config import BackendOptions, EnvironmentOverrides
from i18n_gcs_backend.domain.exceptions import (
    BackendException,
    BucketNotFoundError,
    ConfigurationError,
    CredentialsError,
    NotInitializedError,
    ObjectNotFoundError,
    ParseError,
    RemoteStoreError,
    UnsupportedFormatError,
)
from i18n_gcs_backend.domain.value_objects import ConnectionDescriptor, ReadResult

__all__ = [
    "Backend",
    "BackendOptions",
    "EnvironmentOverrides",
    "HostServices",
    "IHostServices",
    "IInterpolator",
    "ReadCallback",
    "TemplateInterpolator",
    "ConnectionDescriptor",
    "ReadResult",
    # exceptions
    "BackendException",
    "BucketNotFoundError",
    "ConfigurationError",
    "CredentialsError",
    "NotInitializedError",
    "ObjectNotFoundError",
    "ParseError",
    "RemoteStoreError",
    "UnsupportedFormatError",
]
