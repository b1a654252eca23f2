"""
Q&A Service — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

    request_context.RequestContextMiddleware: correlation ID + access log
    request_context.RequestIdLogFilter:       puts the ID on every log record
"""
