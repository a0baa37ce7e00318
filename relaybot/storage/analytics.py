"""Structured relay events, logged and optionally persisted to SQL."""
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
import json
import logging

from sqlalchemy import func, create_engine, Column, Integer, BigInteger, String, DateTime, Text
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class RelayEvent(Base):
    __tablename__ = "relay_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column(BigInteger, nullable=True)
    event_type = Column(String(64), nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    extra = Column(Text, nullable=True)


class AnalyticsStore:
    """SQL sink for relay events."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url, pool_pre_ping=True)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def write(self, chat_id: Optional[int], event_type: str, extra: Optional[str] = None) -> None:
        session = self._session_factory()
        try:
            session.add(RelayEvent(chat_id=chat_id, event_type=event_type, extra=extra))
            session.commit()
        finally:
            session.close()

    def count(self, event_type: Optional[str] = None) -> int:
        session = self._session_factory()
        try:
            query = session.query(RelayEvent)
            if event_type:
                query = query.filter(RelayEvent.event_type == event_type)
            return query.count()
        finally:
            session.close()

    def recent(self, limit: int = 20) -> List[RelayEvent]:
        session = self._session_factory()
        try:
            return session.query(RelayEvent).order_by(RelayEvent.timestamp.desc(), RelayEvent.id.desc()).limit(limit).all()
        finally:
            session.close()

    def stats(self, days: int = 7) -> Tuple[List[Tuple[str, int]], int]:
        """Event counts by type and distinct chat count since the cutoff."""
        cutoff = datetime.utcnow() - timedelta(days=days)
        session = self._session_factory()
        try:
            counts = session.query(
                RelayEvent.event_type,
                func.count(RelayEvent.id),
            ).filter(RelayEvent.timestamp >= cutoff).group_by(RelayEvent.event_type).order_by(RelayEvent.event_type).all()
            chats = session.query(func.count(func.distinct(RelayEvent.chat_id))).filter(
                RelayEvent.timestamp >= cutoff
            ).scalar()
            return [(event_type, count) for event_type, count in counts], chats or 0
        finally:
            session.close()


class EventLog:
    """Event interface handed to every relay component.

    Each event goes to the module logger; when an AnalyticsStore is attached
    it is also written to the database. A failing database never breaks the
    request that emitted the event.
    """

    def __init__(self, store: Optional[AnalyticsStore] = None):
        self.store = store

    def emit(self, event_type: str, chat_id: Optional[int] = None, **fields: Any) -> None:
        logger.info(f"event={event_type} chat_id={chat_id} {fields}")
        if not self.store:
            return
        try:
            extra = json.dumps(fields, default=str) if fields else None
            self.store.write(chat_id, event_type, extra)
        except Exception as e:
            logger.error(f"Failed to persist event {event_type}: {e}")


def init_event_log(database_url: Optional[str]) -> EventLog:
    if not database_url:
        return EventLog()
    store = AnalyticsStore(database_url)
    store.create_tables()
    logger.info("Event analytics persisted to database")
    return EventLog(store)


class RecordingEventLog(EventLog):
    """EventLog that also keeps emitted events in memory."""

    def __init__(self, store: Optional[AnalyticsStore] = None):
        super().__init__(store)
        self.events: list[Dict[str, Any]] = []

    def emit(self, event_type: str, chat_id: Optional[int] = None, **fields: Any) -> None:
        self.events.append({"type": event_type, "chat_id": chat_id, **fields})
        super().emit(event_type, chat_id, **fields)

    def types(self) -> list[str]:
        return [event["type"] for event in self.events]
