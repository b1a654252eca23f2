"""
Q&A Service — Answer Route Handlers
=====================================

Routes:
    GET    /answers/{answer_id}  → 200 AnswerResponse
    DELETE /answers/{answer_id}  → 204

Answers are created through POST /questions/{question_id}/answers
(see routes/questions.py).
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.routes.params import EntityId
from app.schemas.answer import AnswerResponse
from app.services.answer_service import answer_service

router = APIRouter(prefix="/answers", tags=["Answers"])


@router.get(
    "/{answer_id}",
    response_model=AnswerResponse,
    responses={404: {"description": "Answer not found", "content": {"text/plain": {}}}},
    summary="Get an answer",
)
async def get_answer(
    answer_id: EntityId,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> AnswerResponse:
    return await answer_service.get_answer(db, answer_id)


@router.delete(
    "/{answer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Answer not found", "content": {"text/plain": {}}}},
    summary="Delete an answer",
)
async def delete_answer(
    answer_id: EntityId,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Response:
    await answer_service.delete_answer(db, answer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
