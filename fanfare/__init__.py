"""Fanfare: multi-channel notification fan-out.

One inbound event, many recipients, many channels:
  - Batched fan-out on a bounded worker pool with block/reject backpressure
  - Per-recipient, per-channel delivery with failure isolation
  - EMAIL (SendGrid), SMS (HTTP gateway), PUSH (Gotify), IN_APP (signed
    parent-service requests); WEBHOOK and CHAT_APP accepted without a backend
  - Three-pass template engine (loops, conditionals, placeholders)
  - SQLite record store, one PROCESSING -> final status row per recipient
  - Env-driven config with a production guard; typer/rich CLI
"""

__version__ = "0.4.0"
__description__ = "Multi-channel notification fan-out with batched concurrent dispatch"

from fanfare.core.orchestrator import NotificationOrchestrator
from fanfare.cli.app import app as cli

__all__ = ["NotificationOrchestrator", "cli", "__version__"]
