from datetime import datetime, timezone
from typing import Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _object_id(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def _serialize(document: dict) -> dict:
    document = dict(document)
    document["id"] = str(document.pop("_id"))
    return document


class _MongoCollection:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def seed(self, records: Iterable[dict]) -> int:
        if await self.count() > 0:
            return 0
        documents = []
        for record in records:
            document = dict(record)
            document.pop("id", None)
            documents.append(document)
        if not documents:
            return 0
        result = await self.collection.insert_many(documents)
        print(f"Seeded {len(result.inserted_ids)} documents into {self.collection.name}")
        return len(result.inserted_ids)

    async def _all(self) -> List[dict]:
        return [_serialize(document) async for document in self.collection.find()]

    async def _get(self, record_id: str) -> Optional[dict]:
        object_id = _object_id(record_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return _serialize(document) if document else None

    async def _insert(self, data: dict) -> dict:
        document = dict(data)
        document.pop("id", None)
        document.setdefault("createdAt", _utcnow())
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return _serialize(document)

    async def _update(self, record_id: str, update: dict) -> Optional[dict]:
        object_id = _object_id(record_id)
        if object_id is None:
            return None
        result = await self.collection.update_one({"_id": object_id}, update)
        if result.matched_count == 0:
            return None
        return await self._get(record_id)

    async def _delete(self, record_id: str) -> bool:
        object_id = _object_id(record_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0


class MongoReportStore(_MongoCollection):
    def __init__(self, database: AsyncIOMotorDatabase):
        super().__init__(database.get_collection("reports"))

    async def list_reports(self) -> List[dict]:
        return await self._all()

    async def get_report(self, report_id: str) -> Optional[dict]:
        return await self._get(report_id)

    async def create_report(self, data: dict) -> dict:
        return await self._insert(data)

    async def update_report(self, report_id: str, changes: dict) -> Optional[dict]:
        return await self._update(report_id, {"$set": {**changes, "updatedAt": _utcnow()}})

    async def add_comment(self, report_id: str, comment: dict) -> Optional[dict]:
        return await self._update(report_id, {"$push": {"comments": comment}, "$set": {"updatedAt": _utcnow()}})

    async def delete_report(self, report_id: str) -> bool:
        return await self._delete(report_id)


class MongoUserStore(_MongoCollection):
    def __init__(self, database: AsyncIOMotorDatabase):
        super().__init__(database.get_collection("users"))

    async def list_users(self) -> List[dict]:
        return await self._all()

    async def get_user(self, user_id: str) -> Optional[dict]:
        return await self._get(user_id)

    async def find_by_email(self, email: str) -> Optional[dict]:
        document = await self.collection.find_one({"email": email.strip().lower()})
        return _serialize(document) if document else None

    async def create_user(self, data: dict) -> dict:
        return await self._insert(data)

    async def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        return await self._update(user_id, {"$set": changes})

    async def delete_user(self, user_id: str) -> bool:
        return await self._delete(user_id)
