"""
Pagination boundary for the ESG contract layer.

Design intent:
- Derive page metadata (totalPages/first/last/empty) from inputs only.
- Share one sort-directive grammar ("property,asc|desc") across listings.
"""
from .page import SortDirective, build_page_response, paginate, parse_sort, sort_items

__all__ = ["SortDirective", "build_page_response", "paginate", "parse_sort", "sort_items"]
