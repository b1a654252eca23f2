"""
Q&A Service — API Routes Package
==================================

Route Inventory:
    - questions.py: POST/GET /questions, GET/DELETE /questions/{id},
                    POST /questions/{id}/answers
    - answers.py:   GET/DELETE /answers/{id}
    - health.py:    GET /health

Routes are THIN: parse the request, call a service, pick the status code.
Error responses come from the global exception handlers in main.py.
"""
