"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from pdtracker.models.lookups import Area, Venue, Sector, Site  # noqa: F401
from pdtracker.models.staff import Staff  # noqa: F401
from pdtracker.models.pd_record import PDRecord  # noqa: F401
