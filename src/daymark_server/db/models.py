"""SQLAlchemy 2.0 ORM models for the Daymark schema."""

from datetime import date as calendar_date
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from daymark_server.db.base import Base


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Day aggregate
# =============================================================================


class Day(Base):
    """One user's planning page for one calendar date.

    Keyed by (user_id, date). Created lazily on first access and never
    deleted by the API; all day-scoped rows hang off it.
    """

    __tablename__ = "days"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)

    # Identity provider subject, not a foreign key
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    date: Mapped[calendar_date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    priorities: Mapped[list["TopPriority"]] = relationship(
        back_populates="day",
        order_by="TopPriority.order",
        cascade="all, delete-orphan",
        lazy="raise",
    )
    discussion_items: Mapped[list["DiscussionItem"]] = relationship(
        back_populates="day",
        order_by="DiscussionItem.order",
        cascade="all, delete-orphan",
        lazy="raise",
    )
    time_blocks: Mapped[list["TimeBlock"]] = relationship(
        back_populates="day",
        order_by="TimeBlock.start_time",
        cascade="all, delete-orphan",
        lazy="raise",
    )
    quick_note: Mapped["QuickNote | None"] = relationship(
        back_populates="day", cascade="all, delete-orphan", lazy="raise"
    )
    daily_review: Mapped["DailyReview | None"] = relationship(
        back_populates="day", cascade="all, delete-orphan", lazy="raise"
    )

    __table_args__ = (
        Index("ix_days_user_id_date", "user_id", "date", unique=True),
    )

    def __repr__(self) -> str:
        return f"<Day(id={self.id}, user_id={self.user_id}, date={self.date})>"


class TopPriority(Base):
    """A ranked task on one Day.

    ``order`` is assigned as count + 1 at insert time and never renumbered,
    so gaps (and, after deletions, repeats) are possible.
    """

    __tablename__ = "top_priorities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    day_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("days.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    day: Mapped[Day] = relationship(back_populates="priorities")

    __table_args__ = (Index("ix_top_priorities_day_id_order", "day_id", "order"),)

    def __repr__(self) -> str:
        return f"<TopPriority(id={self.id}, order={self.order}, completed={self.completed})>"


class DiscussionItem(Base):
    """Something to raise with someone today."""

    __tablename__ = "discussion_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    day_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("days.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    day: Mapped[Day] = relationship(back_populates="discussion_items")

    __table_args__ = (Index("ix_discussion_items_day_id", "day_id"),)


class TimeBlock(Base):
    """A scheduled slot on a Day (deep work, meetings, breaks...)."""

    __tablename__ = "time_blocks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    day_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("days.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Free-form category, "Deep Work" unless the client says otherwise
    type: Mapped[str] = mapped_column(String(50), default="Deep Work", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    day: Mapped[Day] = relationship(back_populates="time_blocks")

    __table_args__ = (Index("ix_time_blocks_day_id_start", "day_id", "start_time"),)


class FocusSession(Base):
    """A Pomodoro-style timer run inside a TimeBlock.

    Open while ``ended_at`` is NULL; a block has at most one open session.
    ``duration`` and ``target_duration`` are whole seconds; ``duration`` is
    set when the session ends.
    """

    __tablename__ = "focus_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    time_block_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("time_blocks.id", ondelete="CASCADE"), nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    interrupted: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )

    # "focus", "short_break" or "long_break"; not enforced
    session_type: Mapped[str] = mapped_column(String(20), default="focus", nullable=False)
    target_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_focus_sessions_time_block_id", "time_block_id"),
        Index("ix_focus_sessions_started_at", "started_at"),
    )


class QuickNote(Base):
    """Free text scratchpad, one per Day."""

    __tablename__ = "quick_notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    day_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("days.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    day: Mapped[Day] = relationship(back_populates="quick_note")


class DailyReview(Base):
    """End-of-day reflection, one per Day."""

    __tablename__ = "daily_reviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    day_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("days.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    went_well: Mapped[str | None] = mapped_column(Text, nullable=True)
    didnt_go_well: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    day: Mapped[Day] = relationship(back_populates="daily_review")


# =============================================================================
# Tools
# =============================================================================


class EisenhowerTask(Base):
    """Matrix task owned by a user, independent of any Day.

    Quadrants: 1 urgent+important, 2 important, 3 urgent, 4 neither.
    Deleted when promoted to a Day priority.
    """

    __tablename__ = "eisenhower_tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    quadrant: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (Index("ix_eisenhower_tasks_user_id", "user_id"),)


class DecisionEntry(Base):
    """Decision log entry: what was decided, why, and how it turned out."""

    __tablename__ = "decision_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    date: Mapped[calendar_date] = mapped_column(Date, nullable=False)
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
    decision: Mapped[str] = mapped_column(Text, nullable=False)
    outcome: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (Index("ix_decision_entries_user_id_date", "user_id", "date"),)


class LifeArea(Base):
    """User-defined grouping such as "Work" or "Personal". Archived, never deleted."""

    __tablename__ = "life_areas"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_archived: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (Index("ix_life_areas_user_id", "user_id"),)
