"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, OwnerMixin, TimestampMixin, and the combined OwnedModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from task_manager.shared.utils.datetime import utc_now
from task_manager.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class OwnerMixin:
    """Mixin for identity-owned rows.

    owner_id is the auth provider's user id. The identity table lives with the
    auth provider, so there is no foreign key here; the RLS policy compares
    owner_id to app.current_user_id.
    """

    @declared_attr
    def owner_id(cls) -> Mapped[str]:
        return mapped_column(String(128), nullable=False, index=True)


class TimestampMixin:
    """Mixin for created_at and updated_at (timezone-aware, UTC)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
            nullable=False,
        )


class OwnedModel(CuidMixin, OwnerMixin, TimestampMixin):
    """Combined mixin: CUID + owner_id + created_at/updated_at."""

    __abstract__ = True
