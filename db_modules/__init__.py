"""Database domain mixins package."""

from .db_users import UserDbMixin
from .db_teams import TeamDbMixin
from .db_programs import ProgramDbMixin
from .db_registrations import RegistrationDbMixin
from .db_sessions import SessionDbMixin
from .memory_storage import MemoryStorage

__all__ = [
    "UserDbMixin",
    "TeamDbMixin",
    "ProgramDbMixin",
    "RegistrationDbMixin",
    "SessionDbMixin",
    "MemoryStorage",
]
