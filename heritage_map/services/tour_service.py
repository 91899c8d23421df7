"""
Tour service - owns live tour sessions and their auto-advance timers
"""
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from heritage_map.config.settings import get_settings
from heritage_map.core.exceptions import TourSessionLimitError, TourSessionNotFoundError
from heritage_map.core.geo import PointOfInterest
from heritage_map.core.metrics import record_tour_event
from heritage_map.core.tour import TourController, TourSession, TourState
from heritage_map.services.tour_scheduler import TourScheduler

logger = logging.getLogger(__name__)


@dataclass
class TourRecord:
    controller: TourController
    session: TourSession
    autoplay: bool = False
    last_touched: float = field(default_factory=time.monotonic)


class TourSessionStore:
    """
    Latest snapshot per session, kept in memory for the life of the process.

    Records untouched for ``ttl_seconds`` expire. When the store is full, the
    least recently touched idle or complete tour makes room for a new one;
    only flying and paused tours count against the limit.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        ttl_seconds: float = 3600.0,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._records: Dict[str, TourRecord] = {}

    def add(self, record: TourRecord) -> List[str]:
        """
        Store a new record

        Returns:
            Ids of the records dropped to make room
        """
        dropped = self.expire()
        if len(self._records) >= self.max_sessions:
            dropped.extend(self._evict_inactive())
        if len(self._records) >= self.max_sessions:
            raise TourSessionLimitError(self.max_sessions)
        record.last_touched = self._clock()
        self._records[record.session.session_id] = record
        return dropped

    def get(self, session_id: str) -> TourRecord:
        record = self.find(session_id)
        if record is None:
            raise TourSessionNotFoundError(session_id)
        return record

    def find(self, session_id: str) -> Optional[TourRecord]:
        record = self._records.get(session_id)
        if record is not None:
            record.last_touched = self._clock()
        return record

    def remove(self, session_id: str) -> TourRecord:
        record = self.get(session_id)
        del self._records[session_id]
        return record

    def expire(self) -> List[str]:
        """Drop records not touched within ``ttl_seconds``."""
        cutoff = self._clock() - self.ttl_seconds
        expired = [sid for sid, record in self._records.items() if record.last_touched < cutoff]
        for session_id in expired:
            del self._records[session_id]
        if expired:
            logger.info(f"Expired {len(expired)} idle tour sessions")
        return expired

    def _evict_inactive(self) -> List[str]:
        inactive = [record for record in self._records.values() if not record.session.is_active]
        if not inactive:
            return []
        oldest = min(inactive, key=lambda record: record.last_touched)
        session_id = oldest.session.session_id
        del self._records[session_id]
        logger.info(
            f"Evicted {oldest.session.state.value} tour {session_id} to make room",
            extra={"session_id": session_id},
        )
        return [session_id]

    def __len__(self) -> int:
        return len(self._records)


class TourService:
    """Applies controller transitions and publishes the resulting snapshots"""

    def __init__(self, scheduler: Optional[TourScheduler] = None, store: Optional[TourSessionStore] = None):
        tour_settings = get_settings().tour
        if scheduler is None:
            scheduler = TourScheduler(tour_settings.interval_seconds)
        if store is None:
            store = TourSessionStore(tour_settings.max_sessions, tour_settings.session_ttl_seconds)
        self.scheduler = scheduler
        self.store = store

    def start_tour(
        self,
        candidates: Sequence[PointOfInterest],
        origin: PointOfInterest,
        autoplay: bool = False,
    ) -> TourRecord:
        """
        Begin a tour at ``origin`` over ``candidates``

        Args:
            candidates: Places the tour may visit
            origin: Starting place, marked visited immediately
            autoplay: Advance automatically on the scheduler interval

        Returns:
            The stored tour record
        """
        controller = TourController(candidates)
        session = controller.start(TourSession(session_id=uuid.uuid4().hex), origin)
        record = TourRecord(controller=controller, session=session, autoplay=autoplay)
        for dropped in self.store.add(record):
            self.scheduler.stop(dropped)
        record_tour_event("started")

        if autoplay:
            self._schedule(session.session_id)
        return record

    def restart(
        self,
        session_id: str,
        candidates: Sequence[PointOfInterest],
        origin: PointOfInterest,
        autoplay: bool = False,
    ) -> TourRecord:
        """Start an idle (reset) session again at ``origin``, keeping its id"""
        record = self.store.get(session_id)
        controller = TourController(candidates)
        session = controller.start(record.session, origin)
        record.controller = controller
        record.autoplay = autoplay
        record.session = session
        record_tour_event("started")

        if autoplay:
            self._schedule(session_id)
        return record

    def get(self, session_id: str) -> TourRecord:
        return self.store.get(session_id)

    def advance(self, session_id: str) -> TourRecord:
        record = self.store.get(session_id)
        self._apply(record, record.controller.advance(record.session))
        return record

    def pause(self, session_id: str) -> TourRecord:
        record = self.store.get(session_id)
        self._apply(record, record.controller.pause(record.session))
        self.scheduler.stop(session_id)
        return record

    def resume(self, session_id: str) -> TourRecord:
        record = self.store.get(session_id)
        self._apply(record, record.controller.resume(record.session))
        if record.autoplay:
            self._schedule(session_id)
        return record

    def reset(self, session_id: str) -> TourRecord:
        record = self.store.get(session_id)
        self.scheduler.stop(session_id)
        self._apply(record, record.controller.reset(record.session))
        return record

    def end(self, session_id: str) -> None:
        self.scheduler.stop(session_id)
        self.store.remove(session_id)
        logger.info(f"Tour {session_id} ended", extra={"session_id": session_id})

    def shutdown(self) -> None:
        stopped = self.scheduler.stop_all()
        if stopped:
            logger.info(f"Cancelled {stopped} tour timers on shutdown")

    def _schedule(self, session_id: str) -> None:
        self.scheduler.start(session_id, lambda: self._tick(session_id))

    def _tick(self, session_id: str) -> TourSession:
        record = self.store.find(session_id)
        if record is None:
            return TourSession(session_id=session_id)
        self._apply(record, record.controller.advance(record.session))
        return record.session

    def _apply(self, record: TourRecord, session: TourSession) -> None:
        previous = record.session
        record.session = session
        if session.history != previous.history and session.state == TourState.FLYING:
            record_tour_event("advanced")
        if session.state == TourState.COMPLETE and previous.state != TourState.COMPLETE:
            record_tour_event("completed")
