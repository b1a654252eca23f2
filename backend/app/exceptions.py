"""
Q&A Service — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let services signal outcomes without knowing about
       HTTP; global handlers in main.py translate them into status codes.
How:   Each exception class carries a message and optional context dict.
       The context is logged server-side and never returned to the client.
Who:   Raised by services; caught by the handlers registered in main.py.

Exception Hierarchy:
    QAServiceError (base)
    ├── NotFoundError            → 404 Not Found
    ├── QuestionNotFoundError    → 400 Bad Request (answer references a missing question)
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class QAServiceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Short description, safe to return in an API response
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(QAServiceError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found
    When:    GET or DELETE on a question/answer id with no matching row.

    SQLAlchemy returns None (or a zero rowcount) for missing records; the
    service layer converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class QuestionNotFoundError(QAServiceError):
    """
    Raised when an answer is created under a question that does not exist.

    HTTP:    400 Bad Request

    Why 400 (not 404):
        The request URL names the parent collection; the client sent a write
        that violates referential integrity rather than asking to read a
        missing resource.
    """

    def __init__(
        self,
        question_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["question_id"] = question_id
        super().__init__(message="question not found", context=ctx)
        self.question_id = question_id


class DatabaseError(QAServiceError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error
    When:    Connection lost mid-query, unexpected constraint violation, etc.

    The message returned to the client is always generic; SQL and driver
    details stay in the server log.
    """

    def __init__(
        self,
        message: str = "internal",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
