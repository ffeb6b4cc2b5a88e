"""Primary key generator for ORM rows (CUID2)."""

from cuid2 import Cuid

from panel_policy.core.constants import ID_LENGTH

_generator = Cuid(length=ID_LENGTH)


def generate_cuid() -> str:
    """Return a new collision-resistant id for role, permission and log rows."""
    return _generator.generate()
