"""
Q&A Service — Answer SQLAlchemy Model
=======================================

What:  ORM model representing the `answers` table.
Who:   Used by AnswerService for CRUD and by QuestionService for the detail view.

Foreign key:
    question_id → questions.id ON DELETE CASCADE. The service checks that the
    question exists before inserting; the constraint covers a question deleted
    between that read and the insert.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, BigIntId

if TYPE_CHECKING:
    from app.models.question import Question


class Answer(Base):
    """A reply owned by exactly one Question."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    # Indexed: the detail view loads answers by question_id
    question_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Opaque caller-supplied identifier; nothing authenticates it
    user_id: Mapped[str] = mapped_column(Text, nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    question: Mapped["Question"] = relationship(back_populates="answers")

    def __repr__(self) -> str:
        return (
            f"<Answer(id={self.id}, question_id={self.question_id}, "
            f"user_id='{self.user_id}')>"
        )
