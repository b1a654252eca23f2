"""
Q&A Service — Question Service
================================

What:  Create, list, fetch (with answers) and delete questions.
Why:   Keeps all question persistence logic out of the route handlers.
How:   Plain SQLAlchemy statements against the session passed in by the caller.
Who:   Called by app/routes/questions.py.

Design Decision:
    QuestionService is stateless — it receives the db session for each call.
    The session's transaction is committed by the Database session scope once
    the request handler returns, so methods only flush.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import DatabaseError, NotFoundError
from app.models.question import Question
from app.schemas.answer import AnswerResponse
from app.schemas.question import QuestionDetailResponse, QuestionResponse

logger = logging.getLogger(__name__)


class QuestionService:
    """
    Persistence operations for questions.

    Error Handling Strategy:
        Missing rows become NotFoundError (404). Any SQLAlchemy failure is
        logged and wrapped in DatabaseError (500) so driver details never
        reach the client.
    """

    async def create_question(self, db: AsyncSession, text: str) -> QuestionResponse:
        """
        Insert a new question.

        The id and created_at are generated by the database; the row is
        refreshed after the INSERT so both are present in the response.

        Raises:
            DatabaseError: INSERT failed
        """
        try:
            question = Question(text=text)
            db.add(question)
            await db.flush()
            await db.refresh(question)
            logger.info("Question created: %s", question.id)

            return QuestionResponse(
                id=question.id,
                text=question.text,
                created_at=question.created_at,
            )

        except SQLAlchemyError as e:
            logger.error("Database error creating question: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_question"})

    async def list_questions(self, db: AsyncSession) -> List[QuestionResponse]:
        """
        Return every question, without answers.

        Ordered by id so repeated calls are stable; callers should not depend
        on any particular order.
        """
        try:
            result = await db.execute(select(Question).order_by(Question.id))
            questions = result.scalars().all()

            return [
                QuestionResponse(
                    id=q.id,
                    text=q.text,
                    created_at=q.created_at,
                )
                for q in questions
            ]

        except SQLAlchemyError as e:
            logger.error("Database error listing questions: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_questions"})

    async def get_question_with_answers(
        self, db: AsyncSession, question_id: int
    ) -> QuestionDetailResponse:
        """
        Fetch one question and its full answer collection.

        Query plan:
            SELECT ... FROM questions WHERE id = :id
            SELECT ... FROM answers WHERE question_id IN (:id) ORDER BY id

        Raises:
            NotFoundError: no question with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Question)
                .options(selectinload(Question.answers))
                .where(Question.id == question_id)
            )
            question = result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error("Database error fetching question %s: %s", question_id, str(e))
            raise DatabaseError(context={"question_id": question_id})

        if question is None:
            raise NotFoundError(resource="question", resource_id=question_id)

        return QuestionDetailResponse(
            id=question.id,
            text=question.text,
            created_at=question.created_at,
            answers=[
                AnswerResponse(
                    id=a.id,
                    question_id=a.question_id,
                    user_id=a.user_id,
                    text=a.text,
                    created_at=a.created_at,
                )
                for a in question.answers
            ],
        )

    async def delete_question(self, db: AsyncSession, question_id: int) -> None:
        """
        Delete a question; its answers go with it (ON DELETE CASCADE).

        Raises:
            NotFoundError: zero rows affected (→ 404)
            DatabaseError: DELETE failed (→ 500)
        """
        try:
            result = await db.execute(
                delete(Question).where(Question.id == question_id)
            )

        except SQLAlchemyError as e:
            logger.error("Database error deleting question %s: %s", question_id, str(e))
            raise DatabaseError(context={"question_id": question_id})

        if result.rowcount == 0:
            raise NotFoundError(resource="question", resource_id=question_id)

        logger.info("Question deleted: %s", question_id)


# ── Singleton Instance ────────────────────────────────────────────────────
question_service = QuestionService()
