"""SQLAlchemy models for the local study store."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from study_helper.database import Base


class Subject(Base):
    """A named topic grouping questions."""

    __tablename__ = "subject"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String, nullable=False)
    updated: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Subject(id={self.id}, text='{self.text}')>"


class Question(Base):
    """A text/answer pair belonging to one subject."""

    __tablename__ = "question"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    answer: Mapped[str] = mapped_column(Text, nullable=False, default="")
    subject_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subject.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, subject_id={self.subject_id})>"
