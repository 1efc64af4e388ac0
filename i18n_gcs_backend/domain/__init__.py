"""Domain layer: exceptions and value objects.

No dependencies on infrastructure. Used by the application and
infrastructure layers and by the Backend facade.
"""

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
from i18n_gcs_backend.domain.value_objects import (
    ConnectionDescriptor,
    FetchResult,
    FetchStat,
    PartialConfiguration,
    ReadResult,
)

__all__ = [
    "BackendException",
    "BucketNotFoundError",
    "ConfigurationError",
    "ConnectionDescriptor",
    "CredentialsError",
    "FetchResult",
    "FetchStat",
    "NotInitializedError",
    "ObjectNotFoundError",
    "ParseError",
    "PartialConfiguration",
    "ReadResult",
    "RemoteStoreError",
    "UnsupportedFormatError",
]
