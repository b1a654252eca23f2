"""
Q&A Service — Answer Request/Response Schemas
===============================================

What:  Pydantic models for the answer endpoints.
Why:   FastAPI parses request bodies into these and serializes responses from
       them; they are separate from the ORM model so the API shape is explicit.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class AnswerCreate(BaseModel):
    """
    Body of POST /questions/{id}/answers.

    Both fields default to "" when omitted: only JSON types are checked.
    """
    user_id: str = Field(default="", description="Opaque caller identifier (unauthenticated)")
    text: str = Field(default="", description="Answer body")


class AnswerResponse(BaseModel):
    id: int = Field(description="Server-generated answer id")
    question_id: int = Field(description="Id of the owning question")
    user_id: str = Field(description="Caller identifier supplied at creation")
    text: str = Field(description="Answer body")
    created_at: datetime = Field(description="When the answer was stored")

    model_config = {"from_attributes": True}
