"""Shared utilities."""

from panel_policy.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid"]
