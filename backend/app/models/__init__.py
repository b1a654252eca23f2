"""ORM models registered on app.database.Base."""

from app.models.answer import Answer
from app.models.question import Question

__all__ = ["Answer", "Question"]
