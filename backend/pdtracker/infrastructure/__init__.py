"""Infrastructure Layer - database sessions, logging setup, PDF rendering.

Invariants:
    - Infrastructure imports only core/errors from the domain
    - Driver failures are mapped to PDTrackerError kinds before leaving this layer
"""
