"""Task ORM model. One unit of work owned by exactly one identity."""

from sqlalchemy import CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.core.constants import TASK_TITLE_MAX_LENGTH
from task_manager.domain.enums import TaskStatus
from task_manager.infrastructure.persistence.database import Base
from task_manager.infrastructure.persistence.models.mixins import OwnedModel

_STATUS_VALUES = ", ".join(f"'{s}'" for s in TaskStatus.values())


class Task(OwnedModel, Base):
    """Task owned by the identity that created it. Table: task."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(TASK_TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TaskStatus.PENDING.value,
        server_default=TaskStatus.PENDING.value,
    )

    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_task_status"),
        CheckConstraint("length(btrim(title)) > 0", name="ck_task_title_not_blank"),
        Index("ix_task_owner_created", "owner_id", "created_at"),
    )
