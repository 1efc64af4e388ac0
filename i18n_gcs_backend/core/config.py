"""Backend configuration (options, environment overrides and verification).

Caller options are a pydantic model that also accepts the camelCase keys used
by i18next-style hosts. Environment overrides are read with pydantic-settings
and always win over caller options. verify_configuration turns the merged,
partial result into a ConnectionDescriptor or fails before any remote call.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from i18n_gcs_backend.core.constants import (
    DEFAULT_LOAD_PATH,
    ENV_BUCKET_NAME,
    ENV_CREDENTIALS_PATH,
    ENV_PROJECT,
)
from i18n_gcs_backend.domain.exceptions import ConfigurationError
from i18n_gcs_backend.domain.value_objects import (
    ConnectionDescriptor,
    PartialConfiguration,
)

LoadPathFunction = Callable[[str, str], str | Awaitable[str]]
LoadPath = str | LoadPathFunction
ParseFunction = Callable[[str], Any]


class BackendOptions(BaseModel):
    """Options accepted by Backend.init.

    Field names are snake_case; the i18next camelCase spelling (loadPath,
    bucketName, googleProject, googleApplicationCredentialsPath, apiEndpoint)
    is accepted as an alias.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    load_path: LoadPath = Field(default=DEFAULT_LOAD_PATH, alias="loadPath")
    parse: ParseFunction = json.loads
    bucket_name: str | None = Field(default=None, alias="bucketName")
    google_project: str | None = Field(default=None, alias="googleProject")
    google_application_credentials_path: str | None = Field(
        default=None, alias="googleApplicationCredentialsPath"
    )
    # Alternate endpoint (emulators such as fake-gcs-server); replaces the project
    api_endpoint: str | None = Field(default=None, alias="apiEndpoint")
    logger: logging.Logger | None = None

    @classmethod
    def coerce(cls, options: "BackendOptions | Mapping[str, Any] | None") -> "BackendOptions":
        """Return options as a BackendOptions instance (defaults when None)."""
        if options is None:
            return cls()
        if isinstance(options, BackendOptions):
            return options
        return cls.model_validate(dict(options))


class EnvironmentOverrides(BaseSettings):
    """Process-wide overrides read from BACKEND_* environment variables.

    Empty values count as unset.
    """

    gcp_bucket_name: str | None = None
    gcp_project: str | None = None
    google_application_credentials_path: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="BACKEND_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "EnvironmentOverrides":
        """Build a snapshot from an explicit mapping without reading os.environ.

        Args:
            environ: Mapping of environment variable names to values.

        Returns:
            EnvironmentOverrides holding only the BACKEND_* values present.
        """
        return cls.model_construct(
            gcp_bucket_name=environ.get(ENV_BUCKET_NAME) or None,
            gcp_project=environ.get(ENV_PROJECT) or None,
            google_application_credentials_path=environ.get(ENV_CREDENTIALS_PATH) or None,
        )


def get_environment_overrides() -> EnvironmentOverrides:
    """Read a fresh snapshot of the process environment.

    Not cached: each Backend.init sees the environment as it is at that time.
    """
    return EnvironmentOverrides()


def build_configuration(
    options: BackendOptions,
    overrides: EnvironmentOverrides | None = None,
) -> PartialConfiguration:
    """Combine environment overrides with the caller's options.

    Environment values take precedence. api_endpoint comes from the options
    only.

    Args:
        options: Caller-supplied options.
        overrides: Environment snapshot; None reads the process environment.

    Returns:
        Merged configuration, possibly incomplete.
    """
    env = overrides if overrides is not None else get_environment_overrides()
    return PartialConfiguration(
        bucket_name=env.gcp_bucket_name or options.bucket_name,
        google_project=env.gcp_project or options.google_project,
        # If neither is set, google-auth application default credentials are used
        google_application_credentials_path=(
            env.google_application_credentials_path
            or options.google_application_credentials_path
        ),
        api_endpoint=options.api_endpoint,
    )


def verify_configuration(configuration: PartialConfiguration) -> ConnectionDescriptor:
    """Check that bucket name and project are present.

    Args:
        configuration: Output of build_configuration.

    Returns:
        Verified ConnectionDescriptor.

    Raises:
        ConfigurationError: Naming the missing field and its environment variable.
    """
    if not configuration.bucket_name:
        raise ConfigurationError("bucket_name", "google bucket name", ENV_BUCKET_NAME)
    if not configuration.google_project:
        raise ConfigurationError("google_project", "google project", ENV_PROJECT)

    return ConnectionDescriptor(
        bucket_name=configuration.bucket_name,
        google_project=configuration.google_project,
        google_application_credentials_path=(
            configuration.google_application_credentials_path
        ),
        api_endpoint=configuration.api_endpoint,
    )
