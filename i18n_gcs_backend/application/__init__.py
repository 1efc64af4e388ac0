"""Application layer: path resolution, content dispatch and host interfaces."""

from i18n_gcs_backend.application.content_dispatcher import dispatch
from i18n_gcs_backend.application.interfaces import (
    HostServices,
    IHostServices,
    IInterpolator,
    ReadCallback,
)
from i18n_gcs_backend.application.path_resolver import (
    TemplateInterpolator,
    resolve_object_key,
)

__all__ = [
    "HostServices",
    "IHostServices",
    "IInterpolator",
    "ReadCallback",
    "TemplateInterpolator",
    "dispatch",
    "resolve_object_key",
]
