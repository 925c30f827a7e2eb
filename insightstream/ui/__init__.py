"""NiceGUI interface - thin presentation layer over the session controller.

Responsibilities:
    - File upload with drag-and-drop
    - Processing indicator and error banner
    - Dashboard: summary, statistic cards, chart, insights, suggestions
    - Chat panel with markdown replies

Contains no business logic. Forwards user intents to the SessionController
and re-renders when it reports a change.
"""
