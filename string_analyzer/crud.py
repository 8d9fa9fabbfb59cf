from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging
import threading

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from string_analyzer.database import create_memory_engine, init_db
from string_analyzer.errors import ConflictError, NotFoundError
from string_analyzer.models import StringAnalysis
from string_analyzer import schemas

logger = logging.getLogger(__name__)


def _to_record(row: StringAnalysis) -> schemas.StringResponse:
    """Build a detached, immutable record from a database row"""
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops tzinfo; everything is written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return schemas.StringResponse(
        id=row.id,
        value=row.value,
        properties=schemas.StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map
        ),
        created_at=created_at
    )


class StringStore:
    """
    In-memory content-addressed store for analyzed strings.

    Each store owns a private in-memory database and a lock. Every
    operation runs its check and its write under the lock inside one
    session, so concurrent callers never see a half-inserted record and
    two creates for the same hash cannot both succeed.
    """

    def __init__(self):
        self._engine = create_memory_engine()
        self._session_factory = init_db(self._engine)
        self._lock = threading.Lock()

    def _session(self) -> Session:
        return self._session_factory()

    def _find(self, db: Session, string_id: str) -> Optional[StringAnalysis]:
        return db.query(StringAnalysis).filter(StringAnalysis.id == string_id).first()

    def create(self, string_id: str, value: str, properties: Dict) -> schemas.StringResponse:
        """Insert a new record; raises ConflictError if the hash is already stored"""
        with self._lock, self._session() as db:
            if self._find(db, string_id) is not None:
                raise ConflictError("String already exists in the system")

            db_string = StringAnalysis(
                id=string_id,
                value=value,
                length=properties["length"],
                is_palindrome=properties["is_palindrome"],
                unique_characters=properties["unique_characters"],
                word_count=properties["word_count"],
                sha256_hash=properties["sha256_hash"],
                character_frequency_map=properties["character_frequency_map"],
                created_at=datetime.now(timezone.utc)
            )
            db.add(db_string)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError("String already exists in the system")
            db.refresh(db_string)
            record = _to_record(db_string)

        logger.info(f"Stored string {string_id[:12]}... (length={record.properties.length})")
        return record

    def get_by_id(self, string_id: str) -> schemas.StringResponse:
        """Get a record by its hash; raises NotFoundError"""
        with self._lock, self._session() as db:
            db_string = self._find(db, string_id)
            if db_string is None:
                raise NotFoundError("String does not exist in the system")
            return _to_record(db_string)

    def get_all(self) -> List[schemas.StringResponse]:
        """All records in insertion order"""
        with self._lock, self._session() as db:
            rows = db.query(StringAnalysis).order_by(StringAnalysis.seq).all()
            return [_to_record(row) for row in rows]

    def delete_by_id(self, string_id: str) -> None:
        """Delete a record by its hash; raises NotFoundError"""
        with self._lock, self._session() as db:
            db_string = self._find(db, string_id)
            if db_string is None:
                raise NotFoundError("String does not exist in the system")
            db.delete(db_string)
            db.commit()

        logger.info(f"Deleted string {string_id[:12]}...")

    def count(self) -> int:
        with self._lock, self._session() as db:
            return db.query(StringAnalysis).count()

    def clear(self) -> None:
        """Remove every record"""
        with self._lock, self._session() as db:
            db.query(StringAnalysis).delete()
            db.commit()

    def close(self) -> None:
        self._engine.dispose()
