"""Shared utilities (logging setup, id generation)."""

from panel_policy.shared.logging import setup_logging
from panel_policy.shared.utils import generate_cuid

__all__ = ["generate_cuid", "setup_logging"]
