"""Prediction record persistence: Firestore in production, memory for dev."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import structlog
from google.cloud import firestore

logger = structlog.get_logger()

DEFAULT_COLLECTION = "predictions"


def utc_now_iso() -> str:
    """UTC timestamp like 2024-05-01T08:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class PredictionRecord:
    result: str
    suggestion: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=utc_now_iso)

    def to_document(self) -> dict:
        """Stored/wire representation (camelCase keys)."""
        return {
            "id": self.id,
            "result": self.result,
            "suggestion": self.suggestion,
            "createdAt": self.created_at,
        }

    def to_history(self) -> dict:
        """History-list entry: id plus the record body."""
        return {
            "id": self.id,
            "history": {
                "result": self.result,
                "suggestion": self.suggestion,
                "createdAt": self.created_at,
            },
        }

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "PredictionRecord":
        """Build from a stored document. The document key wins over any id field."""
        return cls(
            id=doc_id,
            result=data.get("result"),
            suggestion=data.get("suggestion"),
            created_at=data.get("createdAt"),
        )


class PredictionStore(ABC):
    """Put-by-key / get-all document store for prediction records."""

    @abstractmethod
    def put(self, record_id: str, record: PredictionRecord) -> None:
        """Upsert the record at ``record_id``. Existing documents are overwritten."""

    @abstractmethod
    def get_all(self) -> list[PredictionRecord]:
        """Every stored record, in store order."""

    def close(self) -> None:
        pass


class FirestorePredictionStore(PredictionStore):
    """Firestore collection of prediction documents keyed by record id.

    Credentials come from the standard Google environment
    (GOOGLE_APPLICATION_CREDENTIALS or workload identity).
    """

    def __init__(
        self,
        project: Optional[str] = None,
        database: Optional[str] = None,
        collection: str = DEFAULT_COLLECTION,
    ):
        kwargs = {"project": project}
        if database:
            kwargs["database"] = database
        self._client = firestore.Client(**kwargs)
        self._collection = self._client.collection(collection)
        self.collection_name = collection

    def put(self, record_id: str, record: PredictionRecord) -> None:
        self._collection.document(record_id).set(record.to_document())
        logger.debug("store.put", backend="firestore", id=record_id)

    def get_all(self) -> list[PredictionRecord]:
        records = [
            PredictionRecord.from_document(snapshot.id, snapshot.to_dict() or {})
            for snapshot in self._collection.stream()
        ]
        logger.debug("store.get_all", backend="firestore", count=len(records))
        return records

    def close(self) -> None:
        self._client.close()


class MemoryPredictionStore(PredictionStore):
    """Process-local store. Insertion ordered; contents vanish on restart."""

    def __init__(self):
        self._docs: dict[str, dict] = {}

    def put(self, record_id: str, record: PredictionRecord) -> None:
        self._docs[record_id] = record.to_document()
        logger.debug("store.put", backend="memory", id=record_id)

    def get_all(self) -> list[PredictionRecord]:
        return [PredictionRecord.from_document(k, v) for k, v in self._docs.items()]


def create_store(
    backend: str,
    project: Optional[str] = None,
    database: Optional[str] = None,
    collection: str = DEFAULT_COLLECTION,
) -> PredictionStore:
    """Storage handler function for Firestore and in-memory stores.

    Raises:
        ValueError: "invalid backend" when neither "firestore" nor "memory".
    """
    if backend == "firestore":
        return FirestorePredictionStore(project=project, database=database, collection=collection)
    elif backend == "memory":
        return MemoryPredictionStore()
    else:
        raise ValueError("invalid backend")
