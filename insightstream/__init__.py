"""InsightStream - AI dashboards and grounded chat for uploaded files.

Combines FastAPI for HTTP endpoints, Agno for model calls, NiceGUI for the
dashboard, pandas and pypdf for file ingestion, and Pydantic for validation.

Components:
    - parsing: CSV, Excel and PDF text extraction
    - agent: Structured analysis and grounded chat clients
    - session: Upload -> analysis -> chat state machine
    - ui: Upload form, dashboard and chat views
    - api: HTTP endpoints
    - models: Session and request/response schemas
"""

__version__ = "0.1.0"
