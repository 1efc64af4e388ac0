"""Cloud Storage gateway (JSON API over httpx + google-auth).

connect() returns a BucketReference, the handle the Backend memoizes per
initialization epoch. fetch() reads one object through it.
"""

from i18n_gcs_backend.infrastructure.gcs._rest_client import (
    BlobReference,
    BucketReference,
    GCSRESTClient,
)
from i18n_gcs_backend.infrastructure.gcs.client import (
    connect,
    construct_file_reference,
    fetch,
    file_exists,
    load_credentials,
)

__all__ = [
    "BlobReference",
    "BucketReference",
    "GCSRESTClient",
    "connect",
    "construct_file_reference",
    "fetch",
    "file_exists",
    "load_credentials",
]
