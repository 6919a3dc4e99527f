from .name_extractor import (
    NameExtractionResult,
    extract_player_names,
    filter_candidate_names,
    is_candidate_name,
)

__all__ = [
    "NameExtractionResult",
    "extract_player_names",
    "filter_candidate_names",
    "is_candidate_name",
]
