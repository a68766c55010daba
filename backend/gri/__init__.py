"""
GRI disclosure data boundary for the ESG contract layer.

Design intent:
- Report business-rule violations as ValidationErrors, all at once.
- Keep search filtering a pure predicate over DTOs.
"""
from .search import matches_criteria, search_gri_data
from .validation import mark_validity, validate_gri_data_item, validate_search_criteria

__all__ = [
    "mark_validity",
    "matches_criteria",
    "search_gri_data",
    "validate_gri_data_item",
    "validate_search_criteria",
]
