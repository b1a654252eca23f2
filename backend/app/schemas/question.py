"""
Q&A Service — Question Request/Response Schemas
=================================================

What:  Pydantic models for the question endpoints.

Two response shapes:
    QuestionResponse         → POST /questions, GET /questions (no answers)
    QuestionDetailResponse   → GET /questions/{id} (answers embedded)

The list view never loads answers; only the single-question view does.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.answer import AnswerResponse


class QuestionCreate(BaseModel):
    """Body of POST /questions. `text` defaults to "" when omitted."""
    text: str = Field(default="", description="Question body")


class QuestionResponse(BaseModel):
    id: int = Field(description="Server-generated question id")
    text: str = Field(description="Question body")
    created_at: datetime = Field(description="When the question was stored")

    model_config = {"from_attributes": True}


class QuestionDetailResponse(QuestionResponse):
    answers: List[AnswerResponse] = Field(
        default_factory=list,
        description="All answers to this question, oldest first",
    )
