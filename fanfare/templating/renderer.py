"""Channel-aware template rendering with built-in fallbacks.

A missing template is never fatal: the renderer substitutes a minimal
fallback body that names the requested template and logs a warning.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fanfare.templating.engine import render
from fanfare.templating.resources import PackageTemplateStore, TemplateStore

logger = logging.getLogger(__name__)

FALLBACK_EMAIL_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body>
    <h2>Notification</h2>
    <p>Template: {template_name}</p>
    <p>This is a fallback template.</p>
</body>
</html>
"""

FALLBACK_SMS_TEMPLATE = "Notification. Template: {template_name}"


def fallback_email(template_name: str) -> str:
    return FALLBACK_EMAIL_TEMPLATE.format(template_name=template_name)


def fallback_sms(template_name: str) -> str:
    return FALLBACK_SMS_TEMPLATE.format(template_name=template_name)


class TemplateRenderer:
    """Looks up channel templates and renders them through the engine.

    Parameters
    ----------
    store:
        Template source.  Defaults to the templates packaged with fanfare.
    """

    def __init__(self, store: TemplateStore | None = None) -> None:
        self._store = store or PackageTemplateStore()

    @property
    def store(self) -> TemplateStore:
        return self._store

    def render_email(self, template_name: str, data: Mapping[str, Any]) -> str:
        """Render the HTML email body for *template_name*."""
        template = self._store.lookup("email", template_name)
        if template is None:
            logger.warning("Email template not found: %s, using fallback", template_name)
            template = fallback_email(template_name)
        return render(template, data)

    def render_sms(self, template_name: str, data: Mapping[str, Any]) -> str:
        """Render the plain-text SMS body for *template_name*."""
        template = self._store.lookup("sms", template_name)
        if template is None:
            logger.warning("SMS template not found: %s, using fallback", template_name)
            template = fallback_sms(template_name)
        return render(template, data)

    def render_text(self, template: str, data: Mapping[str, Any]) -> str:
        """Render an inline template string (push and in-app messages)."""
        return render(template, data)
