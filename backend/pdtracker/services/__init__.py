"""Services Layer - repositories over AsyncSession and the services that use them.

Invariants:
    - Repositories never commit; services commit once per operation
    - Services raise PDTrackerError kinds; routes never inspect messages
"""
