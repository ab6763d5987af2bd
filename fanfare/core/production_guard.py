"""Production configuration guard — enforces hard constraints in production.

The guard validates delivery-critical settings before the dispatcher
starts.  It runs once at startup and fails hard (raises
``ProductionConfigError``) if any constraint is violated, listing every
violation at once.

This module is the single enforcement point for production invariants.
Other code should not scatter ``if is_production`` checks.
"""

from __future__ import annotations

import logging

from fanfare.config import FanfareConfig

logger = logging.getLogger(__name__)

# Credentials each real provider needs.  Keys are ``(selector, backend)``.
PROVIDER_REQUIRED_SETTINGS: dict[tuple[str, str], list[str]] = {
    ("email_provider", "sendgrid"): ["sendgrid_api_key", "email_from"],
    ("sms_provider", "http"): ["sms_api_url", "sms_api_key", "sms_sender_id"],
    ("push_provider", "gotify"): ["gotify_url", "gotify_token"],
    ("in_app_provider", "parent"): [
        "parent_server_url",
        "parent_api_key",
        "parent_secret_key",
    ],
}


class ProductionConfigError(RuntimeError):
    """Raised when production configuration constraints are violated.

    The process cannot safely deliver notifications with the current
    configuration.  It must not be caught and ignored; the process should
    exit.
    """


def enforce_production_constraints(config: FanfareConfig) -> None:
    """Validate all production-critical configuration constraints.

    Constraints enforced
    --------------------
    1. Debug mode must be disabled.
    2. No provider may run in mock mode.
    3. Every selected real provider must have its credentials configured.

    Parameters
    ----------
    config:
        The active ``FanfareConfig`` instance.

    Raises
    ------
    ProductionConfigError
        If any production constraint is violated.
    """
    if not config.is_production:
        return  # Guard only applies in production

    violations: list[str] = []

    # 1. Debug must be off in production
    if config.debug:
        violations.append(
            "debug=True is not allowed in production. Set FANFARE_DEBUG=false."
        )

    # 2. Mocks deliver nothing
    for kind, backend in config.provider_selection.items():
        if backend == "mock":
            violations.append(
                f"{kind} provider is in mock mode; no {kind} notifications would be "
                f"delivered. Set FANFARE_{kind.upper()}_PROVIDER."
            )

    # 3. Real providers need credentials
    for (selector, backend), fields in PROVIDER_REQUIRED_SETTINGS.items():
        if getattr(config, selector) != backend:
            continue
        for field_name in fields:
            if not getattr(config, field_name, ""):
                violations.append(
                    f"'{field_name}' is required for {selector}={backend} but not "
                    f"configured. Set FANFARE_{field_name.upper()}."
                )

    if violations:
        msg = (
            "Production configuration guard failed.\n"
            + "\n".join(f"  - {v}" for v in violations)
        )
        logger.critical(msg)
        raise ProductionConfigError(msg)

    logger.info("Production configuration guard passed.")
