"""Domain exceptions for the GCS translation backend.

Every failure the backend can report is one of these types. The host
framework receives them through the read callback; direct callers of
Backend.read_file or the gateway functions see them raised.
"""

from typing import Any

from i18n_gcs_backend.shared.enums import CredentialsErrorKind


class BackendException(Exception):
    """Base exception for all backend errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. bucket, object_key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BackendException):
    """Raised when a required configuration value is missing."""

    def __init__(self, field: str, description: str, env_var: str) -> None:
        """Initialize with the missing field and the variable that can supply it.

        Args:
            field: Option name that is missing (e.g. "bucket_name").
            description: Wording used in the message (e.g. "google bucket name").
            env_var: Environment variable that can supply the value.
        """
        super().__init__(
            f"You forgot to specify a {description}, please check your options "
            f"or set the environment variable {env_var}",
            "CONFIGURATION_ERROR",
            {"field": field, "env_var": env_var},
        )


class NotInitializedError(BackendException):
    """Raised when reading from a backend that was never initialized."""

    def __init__(self) -> None:
        super().__init__(
            "Backend is not initialized; call init() with bucket options first",
            "NOT_INITIALIZED",
        )


class CredentialsError(BackendException):
    """Credentials could not be loaded for a connection attempt."""

    def __init__(self, path: str | None, kind: CredentialsErrorKind) -> None:
        """Initialize with the credentials path and what went wrong.

        Args:
            path: Credentials file path, or None for default credentials.
            kind: Failure kind (not_found, malformed, unavailable).
        """
        if kind == CredentialsErrorKind.NOT_FOUND:
            message = f"Was unable to find the authentication file located at {path}"
        elif kind == CredentialsErrorKind.MALFORMED:
            message = f"The provided file at {path} does not contain valid JSON"
        else:
            message = (
                "No credentials file was configured and no application default "
                "credentials could be found"
            )
        super().__init__(
            message,
            "CREDENTIALS_ERROR",
            {"path": path, "kind": kind.value},
        )
        self.kind = kind


class RemoteStoreError(BackendException):
    """The remote store could not be reached or answered with an error."""

    def __init__(
        self,
        reason: str,
        *,
        bucket: str | None = None,
        object_key: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"reason": reason}
        if bucket is not None:
            details["bucket"] = bucket
        if object_key is not None:
            details["object_key"] = object_key
        target = f"gs://{bucket}/{object_key or ''}" if bucket else "remote store"
        super().__init__(
            f"Remote store request failed for {target}: {reason}",
            "REMOTE_STORE_ERROR",
            details,
        )


class BucketNotFoundError(RemoteStoreError):
    """The configured bucket does not exist on the remote store."""

    def __init__(self, bucket: str) -> None:
        BackendException.__init__(
            self,
            f"The given Bucket {bucket} does not exist",
            "BUCKET_NOT_FOUND",
            {"bucket": bucket},
        )


class ObjectNotFoundError(RemoteStoreError):
    """The resolved object key does not exist in the bucket."""

    def __init__(self, bucket: str, object_key: str) -> None:
        BackendException.__init__(
            self,
            f"File not found: gs://{bucket}/{object_key}",
            "OBJECT_NOT_FOUND",
            {"bucket": bucket, "object_key": object_key},
        )


class UnsupportedFormatError(BackendException):
    """The object key has an extension no parser is registered for."""

    def __init__(self, extension: str, object_key: str) -> None:
        super().__init__(
            f"Unrecognized extension '{extension}' for {object_key}, "
            "only supports json files",
            "UNSUPPORTED_FORMAT",
            {"extension": extension, "object_key": object_key},
        )


class ParseError(BackendException):
    """The object content could not be parsed by the configured parser."""

    def __init__(self, object_key: str, reason: str) -> None:
        super().__init__(
            f"error parsing {object_key}: {reason}",
            "PARSE_ERROR",
            {"object_key": object_key},
        )
