"""Request authentication helpers for outbound service calls."""

from fanfare.security.signing import generate_signature, iso_timestamp, verify_signature

__all__ = ["generate_signature", "iso_timestamp", "verify_signature"]
