"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON, except the PDF and CSV downloads

Design Decisions:
    - Thin routes: parse, delegate to a service, shape the response
"""
