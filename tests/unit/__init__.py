"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Extension dispatch and CSV, Excel, PDF extraction
    - models/: AnalysisResult validation and aliases
    - agent/: Config validation, analysis parsing, chat history mapping
    - session/: Controller transitions, staleness and idempotent replies
"""
