import asyncpg

from database.repositories import CompetitionRepositoryDB, ScoreRepositoryDB


class DatabaseManager:
    """Bundles the repositories that share one asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool
        self.competitions = CompetitionRepositoryDB(pool)
        self.scores = ScoreRepositoryDB(pool)
