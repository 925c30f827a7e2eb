"""Integration tests for the FastAPI app with real parsing.

Uploads go through multipart parsing, real file extraction and dependency
injection; only the remote model clients are stubbed.
"""
