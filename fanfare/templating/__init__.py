"""Fanfare templating — the three-pass engine and its template sources.

``render`` is a pure function over template text and a data mapping.
``TemplateRenderer`` adds channel-specific lookup (``email/``, ``sms/``)
through a ``TemplateStore`` and substitutes fallback content when a
template is missing.
"""

from fanfare.templating.engine import format_value, is_truthy, render, resolve_value
from fanfare.templating.renderer import TemplateRenderer, fallback_email, fallback_sms
from fanfare.templating.resources import (
    ChainedTemplateStore,
    DirectoryTemplateStore,
    InMemoryTemplateStore,
    PackageTemplateStore,
    TemplateStore,
)

__all__ = [
    "render",
    "resolve_value",
    "format_value",
    "is_truthy",
    "TemplateRenderer",
    "fallback_email",
    "fallback_sms",
    "TemplateStore",
    "DirectoryTemplateStore",
    "PackageTemplateStore",
    "InMemoryTemplateStore",
    "ChainedTemplateStore",
]
