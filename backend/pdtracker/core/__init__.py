"""Core Layer - pure PD tracker rules: filters, venue rule, edits, certificate layout.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Functions are synchronous and deterministic (no IO)
"""
