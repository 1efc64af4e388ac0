"""Read one translation resource from the configured bucket and print it as JSON.

Usage:
    uv run python -m scripts.read_resource <language> <namespace>
The object key is BACKEND_LOAD_PATH (default "{{lng}}/{{ns}}.json") with
{{lng}} and {{ns}} substituted. Bucket, project and credentials come from
BACKEND_GCP_BUCKET_NAME, BACKEND_GCP_PROJECT and
BACKEND_GOOGLE_APPLICATION_CREDENTIALS_PATH. BACKEND_API_ENDPOINT (emulator
URL) is honoured by this script only. Set BACKEND_DEBUG=1 for debug logging
on stderr.
"""

import asyncio
import json
import sys
from typing import Any

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from i18n_gcs_backend import Backend, BackendException, HostServices, TemplateInterpolator
from i18n_gcs_backend.core.constants import DEFAULT_LOAD_PATH
from i18n_gcs_backend.shared.logging import setup_logging

USAGE = "Usage: uv run python -m scripts.read_resource <language> <namespace>"


class ScriptSettings(BaseSettings):
    api_endpoint: str | None = None
    load_path: str = DEFAULT_LOAD_PATH
    debug: bool = False

    model_config = SettingsConfigDict(env_prefix="BACKEND_", extra="ignore")


async def read_resource(
    language: str,
    namespace: str,
    settings: ScriptSettings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> Any:
    """Read the resource for (language, namespace) and return the parsed data.

    Raises:
        BackendException: Configuration error, or the error the backend
            reported for the read.
    """
    backend = Backend(
        HostServices(interpolator=TemplateInterpolator()),
        {"load_path": settings.load_path, "api_endpoint": settings.api_endpoint},
        http_client=http_client,
    )
    outcome: dict[str, Any] = {}

    def _callback(error: Exception | None, data: Any) -> None:
        outcome["error"] = error
        outcome["data"] = data

    try:
        await backend.read(language, namespace, _callback)
    finally:
        await backend.aclose()

    if outcome["error"] is not None:
        raise outcome["error"]
    return outcome["data"]


async def main() -> None:
    """Read <language> <namespace> and print the parsed resource."""
    if len(sys.argv) != 3 or not all(sys.argv[1:]):
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    language, namespace = sys.argv[1], sys.argv[2]

    settings = ScriptSettings()
    setup_logging(settings.debug, stream=sys.stderr)

    try:
        data = await read_resource(language, namespace, settings)
    except BackendException as e:
        print(f"Failed to read {language}/{namespace}: {e.message}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
