"""Column mixins shared by the RBAC tables (role, permission, role_permission, user_role).

Tenants and users live in the host application's schema, so tenant_id and
user ids here are plain indexed strings with no foreign key.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from panel_policy.shared.utils.generators import generate_cuid


class CuidPrimaryKey:
    """String primary key filled with a CUID2 on insert."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TenantScoped:
    """Owning tenant of an RBAC row; every permission lookup filters on it."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(String, nullable=False, index=True)


class Timestamped:
    """created_at / updated_at maintained by the database clock."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
        )


class TenantScopedModel(CuidPrimaryKey, TenantScoped, Timestamped):
    """Editable tenant-scoped table (roles): id, tenant_id and timestamps."""

    __abstract__ = True
