"""
Q&A Service — Question SQLAlchemy Model
=========================================

What:  ORM model representing the `questions` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by QuestionService and AnswerService, and by Database.connect()
       to create the schema.

Table Design:
    - 64-bit autoincrement primary key (BIGINT); ids appear in URLs
    - text: TEXT, no artificial length limit
    - created_at: assigned by the database (CURRENT_TIMESTAMP), never by the client
    - answers: owned collection; the database cascade removes them with the question
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, BigIntId

if TYPE_CHECKING:
    from app.models.answer import Answer


class Question(Base):
    """
    A top-level discussion item.

    Lifecycle:
        Created by POST /questions, read any number of times, deleted by
        DELETE /questions/{id}. There is no update path.

    Query Patterns:
        - List: SELECT ... FROM questions ORDER BY id (answers not loaded)
        - Detail: SELECT by primary key + selectin load of answers
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # passive_deletes: rely on ON DELETE CASCADE instead of loading the
    # collection just to delete it
    answers: Mapped[List["Answer"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Answer.id",
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, created_at='{self.created_at}')>"
