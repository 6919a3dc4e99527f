from .competition_repo import CompetitionRepositoryDB
from .score_repo import ScoreRepositoryDB

__all__ = ["CompetitionRepositoryDB", "ScoreRepositoryDB"]
