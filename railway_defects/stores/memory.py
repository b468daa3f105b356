import copy
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class _MemoryCollection:
    """Insertion-ordered dict of records keyed by id.

    Records are deep-copied on the way in and out so callers can never mutate
    stored state by accident.
    """

    def __init__(self, records: Iterable[dict] = ()):
        self._records: Dict[str, dict] = {}
        for record in records:
            self._insert(record)

    def _insert(self, record: dict) -> dict:
        record = copy.deepcopy(record)
        record_id = str(record.get("id") or record.get("_id") or uuid.uuid4().hex)
        record.pop("_id", None)
        record["id"] = record_id
        self._records[record_id] = record
        return copy.deepcopy(record)

    async def count(self) -> int:
        return len(self._records)

    async def _all(self) -> List[dict]:
        return [copy.deepcopy(record) for record in self._records.values()]

    async def _get(self, record_id: str) -> Optional[dict]:
        record = self._records.get(str(record_id))
        return copy.deepcopy(record) if record is not None else None

    async def _update(self, record_id: str, changes: dict) -> Optional[dict]:
        record = self._records.get(str(record_id))
        if record is None:
            return None
        record.update(copy.deepcopy(changes))
        return copy.deepcopy(record)

    async def _delete(self, record_id: str) -> bool:
        return self._records.pop(str(record_id), None) is not None


class MemoryReportStore(_MemoryCollection):
    async def list_reports(self) -> List[dict]:
        return await self._all()

    async def get_report(self, report_id: str) -> Optional[dict]:
        return await self._get(report_id)

    async def create_report(self, data: dict) -> dict:
        data = dict(data)
        data.pop("id", None)
        data.setdefault("createdAt", _utcnow())
        return self._insert(data)

    async def update_report(self, report_id: str, changes: dict) -> Optional[dict]:
        return await self._update(report_id, {**changes, "updatedAt": _utcnow()})

    async def add_comment(self, report_id: str, comment: dict) -> Optional[dict]:
        record = self._records.get(str(report_id))
        if record is None:
            return None
        comments = record.get("comments")
        if not isinstance(comments, list):
            comments = record["comments"] = []
        comments.append(copy.deepcopy(comment))
        record["updatedAt"] = _utcnow()
        return copy.deepcopy(record)

    async def delete_report(self, report_id: str) -> bool:
        return await self._delete(report_id)


class MemoryUserStore(_MemoryCollection):
    async def list_users(self) -> List[dict]:
        return await self._all()

    async def get_user(self, user_id: str) -> Optional[dict]:
        return await self._get(user_id)

    async def find_by_email(self, email: str) -> Optional[dict]:
        wanted = email.strip().lower()
        for record in self._records.values():
            if str(record.get("email", "")).strip().lower() == wanted:
                return copy.deepcopy(record)
        return None

    async def create_user(self, data: dict) -> dict:
        data = dict(data)
        data.pop("id", None)
        data.setdefault("createdAt", _utcnow())
        return self._insert(data)

    async def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        return await self._update(user_id, changes)

    async def delete_user(self, user_id: str) -> bool:
        return await self._delete(user_id)
