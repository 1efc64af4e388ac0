"""Value objects passed between the backend components.

All are immutable. ConnectionDescriptor is the only configuration type the
gateway accepts; PartialConfiguration must be verified first.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PartialConfiguration:
    """Merged but unverified bucket configuration."""

    bucket_name: str | None = None
    google_project: str | None = None
    google_application_credentials_path: str | None = None
    api_endpoint: str | None = None


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Verified bucket configuration (bucket and project always non-empty)."""

    bucket_name: str
    google_project: str
    google_application_credentials_path: str | None = None
    api_endpoint: str | None = None

    def __post_init__(self) -> None:
        if not self.bucket_name:
            raise ValueError("bucket_name must be a non-empty string")
        if not self.google_project:
            raise ValueError("google_project must be a non-empty string")


@dataclass(frozen=True)
class FetchResult:
    """Raw object content and its modification time."""

    raw_content: str
    last_modified: datetime


@dataclass(frozen=True)
class FetchStat:
    mtime: datetime


@dataclass(frozen=True)
class ReadResult:
    """Parsed resource together with the stat of the object it came from."""

    data: Any
    stat: FetchStat
