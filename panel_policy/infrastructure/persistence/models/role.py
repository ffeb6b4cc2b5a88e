"""Role ORM model. Tenant-scoped roles (super_admin, editor, ...)."""

from sqlalchemy import Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from panel_policy.infrastructure.persistence.database import Base
from panel_policy.infrastructure.persistence.models.mixins import TenantScopedModel


class Role(TenantScopedModel, Base):
    """Role. Table: role. Unique (tenant_id, code)."""

    __tablename__ = "role"

    code: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_role_tenant_code"),)
