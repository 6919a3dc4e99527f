from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CompetitionRepositoryDB, ScoreRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CompetitionRepositoryDB",
    "ScoreRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
