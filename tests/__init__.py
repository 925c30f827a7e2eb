"""Test package for InsightStream.

Structure:
    - unit/: Parsing, schemas, agents and the session controller in isolation
    - integration/: HTTP endpoints through the ASGI app

Remote model calls are replaced with stub clients or patched Agno agents,
so no API key is needed. Leverages pytest with pytest-check for soft assertions.
"""
