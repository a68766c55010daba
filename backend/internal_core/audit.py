from __future__ import annotations

import datetime as _dt
import logging
from threading import RLock
from typing import Any, Callable, List, Optional

from backend.pagination import paginate

from .config import ContractsConfig, load_config
from .contracts import AuditAction, AuditLogDto, InvalidArgument, PageResponse

logger = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]


def _utc_now() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


def _sanitize_detail(detail: Optional[str], max_chars: int) -> Optional[str]:
    # Keep each record on one line and bounded in size.
    if detail is None:
        return None
    detail = detail.replace("\r", " ").replace("\n", " ").strip()
    if len(detail) > max_chars:
        detail = detail[: max(max_chars - 1, 0)] + "…"
    return detail


class AuditTrail:
    """Append-only record of state-changing actions.

    Records are never updated or removed; ids increase by one per record.
    """

    def __init__(self, config: Optional[ContractsConfig] = None, clock: Optional[Clock] = None):
        self._config = config or load_config()
        self._clock = clock or _utc_now
        self._lock = RLock()
        self._records: List[AuditLogDto] = []

    def record(
        self,
        entity_type: str,
        entity_id: Any,
        action: AuditAction,
        details: Optional[str] = None,
        username: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuditLogDto:
        if not entity_type or not entity_type.strip():
            raise InvalidArgument("entity_type is required")
        if entity_id is None or str(entity_id).strip() == "":
            raise InvalidArgument("entity_id is required")
        if not action or not str(action).strip():
            raise InvalidArgument("action is required")

        with self._lock:
            entry = AuditLogDto(
                id=len(self._records) + 1,
                entity_type=entity_type,
                entity_id=str(entity_id),
                action=action,
                details=_sanitize_detail(details, self._config.ESG_AUDIT_DETAIL_MAX_CHARS),
                username=username,
                ip_address=ip_address,
                created_at=self._clock(),
            )
            self._records.append(entry)
        logger.debug("audit_record id=%s entity=%s/%s action=%s", entry.id, entity_type, entry.entity_id, action)
        return entry

    def get(self, audit_id: int) -> Optional[AuditLogDto]:
        with self._lock:
            if 1 <= audit_id <= len(self._records):
                return self._records[audit_id - 1]
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def find(
        self,
        entity_type: Optional[str] = None,
        entity_id: Any = None,
        username: Optional[str] = None,
        start: Optional[_dt.datetime] = None,
        end: Optional[_dt.datetime] = None,
        page: int = 0,
        size: Optional[int] = None,
    ) -> PageResponse[AuditLogDto]:
        """Page through matching records, newest first.

        ``start``/``end`` bound ``createdAt`` inclusively.
        """
        wanted_id = None if entity_id is None else str(entity_id)
        with self._lock:
            snapshot = list(self._records)

        matched = [
            entry
            for entry in reversed(snapshot)
            if (entity_type is None or entry.entity_type == entity_type)
            and (wanted_id is None or entry.entity_id == wanted_id)
            and (username is None or entry.username == username)
            and (start is None or entry.created_at >= start)
            and (end is None or entry.created_at <= end)
        ]
        page_size = self._config.clamp_page_size(size)
        logger.debug(
            "audit_find entity_type=%s entity_id=%s username=%s matched=%s page=%s",
            entity_type,
            wanted_id,
            username,
            len(matched),
            page,
        )
        return paginate(matched, page, page_size)
