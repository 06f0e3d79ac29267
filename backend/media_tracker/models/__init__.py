"""ORM Models - SQLAlchemy declarative records for all domain entities.

Invariants:
    - All records inherit from Base (db/base.py)
    - User is the tenant root; every other record is scoped by owner_id

Design Decisions:
    - One file per entity for locality
    - All records imported here so SQLAlchemy resolves string-based relationship()
      joins and Base.metadata knows every table before create_all / alembic runs
"""

from media_tracker.models.user import UserRecord  # noqa: F401
from media_tracker.models.category import CategoryRecord  # noqa: F401
from media_tracker.models.group import GroupRecord  # noqa: F401
from media_tracker.models.own_platform import OwnPlatformRecord  # noqa: F401
from media_tracker.models.movie import MovieRecord  # noqa: F401
from media_tracker.models.book import BookRecord  # noqa: F401
from media_tracker.models.tv_show import TvShowRecord  # noqa: F401
from media_tracker.models.videogame import VideogameRecord  # noqa: F401
