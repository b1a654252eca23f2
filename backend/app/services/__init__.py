"""
Q&A Service — Services Layer
==============================

Service Inventory:
    - QuestionService: create / list / get-with-answers / delete questions
    - AnswerService:   create (with parent check) / get / delete answers

Services take the AsyncSession as an argument and return Pydantic response
models; they raise app.exceptions types and never build HTTP responses.
"""
