"""
Posts API: Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies; answers
       unexpected errors with a 500 that still carries the ID
    2. Logging: access line with status and duration, tagged with the request ID
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
