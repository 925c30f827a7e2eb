"""FastAPI endpoints for InsightStream.

Endpoints:
    - GET /health: Service health status
    - POST /analyze: Upload a file and receive its structured analysis
    - POST /chat: Ask a question grounded in extracted file content
"""

from insightstream.api.app import app, create_app

__all__ = ["app", "create_app"]
