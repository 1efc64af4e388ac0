"""Object key resolution from a load path and a language/namespace pair."""

from __future__ import annotations

import inspect
import re
from typing import Any

from i18n_gcs_backend.application.interfaces import IInterpolator
from i18n_gcs_backend.core.config import LoadPath

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")


class TemplateInterpolator:
    """Substitutes {{name}} placeholders; unknown names are left untouched.

    Stand-in for a host framework's interpolator so the backend can expand
    templates such as "locales/{{lng}}/{{ns}}.json" on its own.
    """

    def interpolate(
        self,
        template: str,
        data: dict[str, str],
        language: str,
        options: dict[str, Any],
    ) -> str:
        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            value = data.get(name)
            return match.group(0) if value is None else str(value)

        return _PLACEHOLDER_RE.sub(_replace, template)


async def evaluate_load_path(load_path: LoadPath, language: str, namespace: str) -> str:
    """Return the effective template: the literal, or the function's (awaited) result."""
    if not callable(load_path):
        return load_path
    result = load_path(language, namespace)
    if inspect.isawaitable(result):
        result = await result
    return result


def default_object_key(prefix: str, language: str, namespace: str) -> str:
    """Key used when no interpolator is available.

    "{lng}/{ns}.json" (or "{lng}.json" without a namespace), under prefix
    when prefix is non-empty.
    """
    filename = f"{language}/{namespace}.json" if namespace else f"{language}.json"
    if prefix:
        return f"{prefix}/{filename}"
    return filename


async def resolve_object_key(
    load_path: LoadPath,
    language: str,
    namespace: str,
    interpolator: IInterpolator | None = None,
) -> str:
    """Compute the object key to fetch for (language, namespace).

    Args:
        load_path: Literal template, or sync/async function (language, namespace).
        language: Language tag, e.g. "nb-NO".
        namespace: Namespace, may be empty.
        interpolator: Host interpolator; None selects the built-in layout.

    Returns:
        Object key within the bucket.
    """
    template = await evaluate_load_path(load_path, language, namespace)
    if interpolator is not None:
        return interpolator.interpolate(
            template, {"lng": language, "ns": namespace}, language, {}
        )
    return default_object_key(template, language, namespace)
