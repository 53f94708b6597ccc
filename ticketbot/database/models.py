from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class GuildSettings(Base):
    __tablename__ = "guild_settings"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    command_prefix: Mapped[str] = mapped_column(String(20), default="!")
    locale: Mapped[str] = mapped_column(String(10), default="en-GB")
    error_colour: Mapped[str] = mapped_column(String(7), default="#E74C3C")
    success_colour: Mapped[str] = mapped_column(String(7), default="#2ECC71")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    categories: Mapped[list["Category"]] = relationship(back_populates="guild")


class Category(Base):
    """A ticket category; its roles are the guild's staff roles."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    guild_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("guild_settings.id"))
    name: Mapped[str] = mapped_column(String(100))
    roles: Mapped[list[Any]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    guild: Mapped["GuildSettings"] = relationship(back_populates="categories")

    __table_args__ = (Index("idx_category_guild", "guild_id"),)
