class DatabaseError(Exception):
    """Base for all persistence errors."""


class NotFoundError(DatabaseError):
    """Competition, group entry or player not found."""


class DuplicateError(DatabaseError):
    """Unique constraint violation (join code, player name)."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation."""
