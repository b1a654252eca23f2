"""
Q&A Service — Question Route Handlers
=======================================

What:  Handles the /questions resource and the nested answers collection.
How:   Path templates with typed segments; FastAPI parses {question_id} as a
       64-bit int (a non-numeric or out-of-range id fails validation and is
       answered with 400 by the handler in main.py).
       Bodies are parsed into Pydantic models.

Routes:
    POST   /questions                       → 201 QuestionResponse
    GET    /questions                       → 200 [QuestionResponse]
    GET    /questions/{question_id}         → 200 QuestionDetailResponse
    DELETE /questions/{question_id}         → 204
    POST   /questions/{question_id}/answers → 201 AnswerResponse
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.routes.params import EntityId
from app.schemas.answer import AnswerCreate, AnswerResponse
from app.schemas.question import (
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
)
from app.services.answer_service import answer_service
from app.services.question_service import question_service

router = APIRouter(prefix="/questions", tags=["Questions"])

_PLAIN_TEXT = {"content": {"text/plain": {}}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=QuestionResponse,
    responses={400: {"description": "Malformed JSON body", **_PLAIN_TEXT}},
    summary="Create a question",
)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_question(
    body: QuestionCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> QuestionResponse:
    return await question_service.create_question(db, text=body.text)


@router.get(
    "",
    response_model=List[QuestionResponse],
    summary="List all questions",
    description="Returns every question. Answers are not included; fetch a single question for those.",
)
@router.get("/", include_in_schema=False)
async def list_questions(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[QuestionResponse]:
    return await question_service.list_questions(db)


@router.get(
    "/{question_id}",
    response_model=QuestionDetailResponse,
    responses={
        400: {"description": "Non-numeric id", **_PLAIN_TEXT},
        404: {"description": "Question not found", **_PLAIN_TEXT},
    },
    summary="Get a question with its answers",
)
async def get_question(
    question_id: EntityId,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> QuestionDetailResponse:
    return await question_service.get_question_with_answers(db, question_id)


@router.delete(
    "/{question_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Question not found", **_PLAIN_TEXT}},
    summary="Delete a question and all of its answers",
)
async def delete_question(
    question_id: EntityId,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Response:
    await question_service.delete_question(db, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{question_id}/answers",
    status_code=status.HTTP_201_CREATED,
    response_model=AnswerResponse,
    responses={
        400: {"description": "Malformed body, bad id, or question does not exist", **_PLAIN_TEXT},
    },
    summary="Answer a question",
)
async def create_answer(
    question_id: EntityId,
    body: AnswerCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> AnswerResponse:
    return await answer_service.create_answer(
        db,
        question_id=question_id,
        user_id=body.user_id,
        text=body.text,
    )
