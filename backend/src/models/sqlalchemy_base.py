"""SQLAlchemy table models for the vocabulary store."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for vocabulary tables."""
    pass


class TermRecord(Base):
    """A vocabulary term."""

    __tablename__ = "terms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term_display: Mapped[str] = mapped_column(String(255), nullable=False)
    term_searchable: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"TermRecord(id={self.id!r}, term_display={self.term_display!r})"


class TermObjectRecord(Base):
    """Association between a term and a content object."""

    __tablename__ = "term_objects"

    term_id: Mapped[int] = mapped_column(
        ForeignKey("terms.id", ondelete="CASCADE"),
        primary_key=True
    )
    object_id: Mapped[str] = mapped_column(String(255), primary_key=True)
