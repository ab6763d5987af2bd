"""Template resource stores.

A store maps ``(channel_kind, template_name)`` to raw template text.  Layout
on disk (both for the packaged templates and for a configured directory)::

    {root}/email/{template_name}.html
    {root}/sms/{template_name}.txt

A miss is reported as ``None``; deciding what to do about it belongs to
the renderer.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSIONS: dict[str, str] = {
    "email": ".html",
    "sms": ".txt",
}


def template_filename(channel_kind: str, template_name: str) -> str:
    """Return the relative file name for a template, e.g. ``email/welcome.html``."""
    suffix = TEMPLATE_EXTENSIONS.get(channel_kind, ".txt")
    return f"{channel_kind}/{template_name}{suffix}"


@runtime_checkable
class TemplateStore(Protocol):
    """Protocol every template source implements."""

    def lookup(self, channel_kind: str, template_name: str) -> str | None:
        """Return the template text, or ``None`` if it does not exist."""
        ...


class DirectoryTemplateStore:
    """Reads templates from a directory on the local filesystem.

    Parameters
    ----------
    base_path:
        Root directory containing ``email/`` and ``sms/`` subdirectories.
    """

    def __init__(self, base_path: Path | str) -> None:
        self._base = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base

    def lookup(self, channel_kind: str, template_name: str) -> str | None:
        relative = template_filename(channel_kind, template_name)
        path = (self._base / relative).resolve()
        # Template names come from a closed table, but never read outside the root.
        if self._base.resolve() not in path.parents:
            logger.warning("Template path escapes store root: %s", relative)
            return None
        if not path.is_file():
            return None
        logger.debug("Loaded template %s from %s", relative, self._base)
        return path.read_text(encoding="utf-8")


class PackageTemplateStore:
    """Reads the templates shipped inside the ``fanfare.templating`` package."""

    def __init__(self, package: str = "fanfare.templating", folder: str = "templates") -> None:
        self._root = resources.files(package).joinpath(folder)

    def lookup(self, channel_kind: str, template_name: str) -> str | None:
        relative = template_filename(channel_kind, template_name)
        resource = self._root.joinpath(*relative.split("/"))
        if not resource.is_file():
            return None
        logger.debug("Loaded packaged template %s", relative)
        return resource.read_text(encoding="utf-8")


class InMemoryTemplateStore:
    """Dictionary-backed store, keyed by ``(channel_kind, template_name)``."""

    def __init__(self, templates: dict[tuple[str, str], str] | None = None) -> None:
        self._templates: dict[tuple[str, str], str] = dict(templates or {})

    def add(self, channel_kind: str, template_name: str, text: str) -> None:
        self._templates[(channel_kind, template_name)] = text

    def lookup(self, channel_kind: str, template_name: str) -> str | None:
        return self._templates.get((channel_kind, template_name))


class ChainedTemplateStore:
    """Tries each store in order; the first hit wins."""

    def __init__(self, *stores: TemplateStore) -> None:
        self._stores = list(stores)

    def lookup(self, channel_kind: str, template_name: str) -> str | None:
        for store in self._stores:
            text = store.lookup(channel_kind, template_name)
            if text is not None:
                return text
        return None
