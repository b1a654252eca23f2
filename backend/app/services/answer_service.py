"""
Q&A Service — Answer Service
==============================

What:  Create, fetch and delete answers.
Who:   Called by app/routes/answers.py and the nested
       POST /questions/{id}/answers route in app/routes/questions.py.

Referential check:
    create_answer reads the parent question before inserting. If the question
    is deleted between that read and the INSERT, the foreign key rejects the
    row and the IntegrityError is reported the same way as a missing question.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, QuestionNotFoundError
from app.models.answer import Answer
from app.models.question import Question
from app.schemas.answer import AnswerResponse

logger = logging.getLogger(__name__)


def _to_response(answer: Answer) -> AnswerResponse:
    return AnswerResponse(
        id=answer.id,
        question_id=answer.question_id,
        user_id=answer.user_id,
        text=answer.text,
        created_at=answer.created_at,
    )


class AnswerService:
    """Persistence operations for answers. Stateless; one session per call."""

    async def create_answer(
        self,
        db: AsyncSession,
        question_id: int,
        user_id: str,
        text: str,
    ) -> AnswerResponse:
        """
        Insert an answer under an existing question.

        Workflow Steps:
            1. Look up the question by id
            2. Missing → QuestionNotFoundError, nothing is written
            3. INSERT the answer and refresh it for id/created_at

        Raises:
            QuestionNotFoundError: question does not exist (→ 400)
            DatabaseError: query or INSERT failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Question.id).where(Question.id == question_id)
            )
            exists = result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            logger.error("Database error checking question %s: %s", question_id, str(e))
            raise DatabaseError(context={"question_id": question_id})

        if not exists:
            logger.info("Answer rejected: question %s does not exist", question_id)
            raise QuestionNotFoundError(question_id)

        answer = Answer(question_id=question_id, user_id=user_id, text=text)
        try:
            db.add(answer)
            await db.flush()
            await db.refresh(answer)
        except IntegrityError:
            # Parent removed after the existence check
            await db.rollback()
            logger.info("Answer rejected: question %s deleted concurrently", question_id)
            raise QuestionNotFoundError(question_id)
        except SQLAlchemyError as e:
            logger.error("Database error creating answer: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_answer"})

        logger.info("Answer created: %s (question %s)", answer.id, question_id)
        return _to_response(answer)

    async def get_answer(self, db: AsyncSession, answer_id: int) -> AnswerResponse:
        """
        Fetch one answer by id.

        Raises:
            NotFoundError: no answer with this id (→ 404)
        """
        try:
            answer = await db.get(Answer, answer_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching answer %s: %s", answer_id, str(e))
            raise DatabaseError(context={"answer_id": answer_id})

        if answer is None:
            raise NotFoundError(resource="answer", resource_id=answer_id)

        return _to_response(answer)

    async def delete_answer(self, db: AsyncSession, answer_id: int) -> None:
        """
        Delete one answer.

        Raises:
            NotFoundError: zero rows affected (→ 404)
        """
        try:
            result = await db.execute(delete(Answer).where(Answer.id == answer_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting answer %s: %s", answer_id, str(e))
            raise DatabaseError(context={"answer_id": answer_id})

        if result.rowcount == 0:
            raise NotFoundError(resource="answer", resource_id=answer_id)

        logger.info("Answer deleted: %s", answer_id)


# ── Singleton Instance ────────────────────────────────────────────────────
answer_service = AnswerService()
