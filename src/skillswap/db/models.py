"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations are generated from these models.

Key concepts:
- UUID primary keys, generated by the service layer
- Generic column types so the same models run on PostgreSQL and SQLite
- Secondary indexes match the lookups the services actually make
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class User(Base):
    """A registered member.

    Learn: ``email`` keeps the casing the user typed; ``email_lower`` is
    the uniqueness key. The unique constraint is what makes duplicate
    registration safe under concurrent requests. Text columns carry no
    length cap: registration only checks that fields are present.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    email_lower: Mapped[str] = mapped_column(
        Text, unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    skills_offering: Mapped[str] = mapped_column(Text, nullable=False, default="")
    skills_seeking: Mapped[str] = mapped_column(Text, nullable=False, default="")
    availability: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SwapRequest(Base):
    """A request from one user to another to swap skills.

    Learn: Only the recipient (to_user_id) may change ``status``.
    There is no enforced transition graph.
    """

    __tablename__ = "swap_requests"
    __table_args__ = (
        Index("ix_swap_requests_from_user_id", "from_user_id"),
        Index("ix_swap_requests_to_user_id", "to_user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    from_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    to_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class RequestMessage(Base):
    """A message in the conversation attached to a swap request."""

    __tablename__ = "request_messages"
    __table_args__ = (
        Index("ix_request_messages_request_id", "request_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("swap_requests.id"), nullable=False
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
