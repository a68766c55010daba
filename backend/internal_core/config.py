from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass(frozen=True)
class ContractsConfig:
    ESG_DEFAULT_PAGE_SIZE: int
    ESG_MAX_PAGE_SIZE: int
    ESG_DEFAULT_SORT: str
    ESG_AUDIT_DETAIL_MAX_CHARS: int
    ESG_EXPOSE_INTERNAL_ERRORS: bool

    def clamp_page_size(self, size: int | None) -> int:
        if size is None:
            return self.ESG_DEFAULT_PAGE_SIZE
        return min(int(size), self.ESG_MAX_PAGE_SIZE)


def load_config() -> ContractsConfig:
    default_page_size = _getenv_int("ESG_DEFAULT_PAGE_SIZE", 10)
    max_page_size = _getenv_int("ESG_MAX_PAGE_SIZE", 100)
    if default_page_size <= 0:
        raise ValueError("ESG_DEFAULT_PAGE_SIZE must be > 0")
    if max_page_size < default_page_size:
        raise ValueError("ESG_MAX_PAGE_SIZE must be >= ESG_DEFAULT_PAGE_SIZE")

    return ContractsConfig(
        ESG_DEFAULT_PAGE_SIZE=default_page_size,
        ESG_MAX_PAGE_SIZE=max_page_size,
        ESG_DEFAULT_SORT=_getenv_str("ESG_DEFAULT_SORT", "id").strip() or "id",
        ESG_AUDIT_DETAIL_MAX_CHARS=_getenv_int("ESG_AUDIT_DETAIL_MAX_CHARS", 500),
        ESG_EXPOSE_INTERNAL_ERRORS=_getenv_bool("ESG_EXPOSE_INTERNAL_ERRORS", False),
    )
