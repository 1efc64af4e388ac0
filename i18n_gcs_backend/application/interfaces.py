"""Host capability interfaces (ports) consumed by the backend.

The localization framework that drives the backend may pass a capability
bag with an interpolator. Both are Protocols so any object with the right
shape works.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

# Read completion callback: (error, data) with data False on failure
ReadCallback = Callable[[Exception | None, Any], None]


# Interpolator interface
class IInterpolator(Protocol):
    """Protocol for template interpolation supplied by the host framework."""

    def interpolate(
        self,
        template: str,
        data: dict[str, str],
        language: str,
        options: dict[str, Any],
    ) -> str:
        """Return template with {{name}} placeholders replaced from data."""


# Host services interface
class IHostServices(Protocol):
    """Protocol for the capability bag passed to Backend.init."""

    interpolator: IInterpolator | None


@dataclass
class HostServices:
    """Minimal capability bag for hosts without their own services object."""

    interpolator: IInterpolator | None = None
