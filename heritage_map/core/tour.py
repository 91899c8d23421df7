"""
Tour-guide mode as an explicit state machine.

A ``TourSession`` is an immutable snapshot; every ``TourController`` operation
takes a snapshot and returns a new one, so whoever owns the session (the
in-memory store, a scheduler tick, a test) decides when to publish it.

    IDLE --start--> FLYING --advance--> FLYING ... --advance--> COMPLETE
                      ^  |
               resume |  | pause
                      |  v
                     PAUSED

``reset`` returns any state to IDLE.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import FrozenSet, Optional, Sequence, Tuple

from heritage_map.core.exceptions import InvalidGeoPointError, TourStateError
from heritage_map.core.geo import PointOfInterest, nearest_unvisited

logger = logging.getLogger(__name__)


class TourState(str, enum.Enum):
    """Tour lifecycle state"""
    IDLE = "idle"
    FLYING = "flying"
    PAUSED = "paused"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TourSession:
    session_id: str
    state: TourState = TourState.IDLE
    current: Optional[PointOfInterest] = None
    visited: FrozenSet[str] = frozenset()
    history: Tuple[str, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.state in (TourState.FLYING, TourState.PAUSED)


class TourController:
    """Applies tour transitions over a fixed list of candidate places."""

    def __init__(self, candidates: Sequence[PointOfInterest]):
        self.candidates: Tuple[PointOfInterest, ...] = tuple(candidates)

    def start(self, session: TourSession, origin: PointOfInterest) -> TourSession:
        if session.state != TourState.IDLE:
            raise TourStateError("start", session.state.value)
        if origin.location is None:
            raise InvalidGeoPointError(
                f"Place '{origin.id}' has no usable coordinates",
                details={"place_id": origin.id},
            )
        logger.info(
            f"Tour {session.session_id} started at {origin.id}",
            extra={"session_id": session.session_id, "poi_id": origin.id},
        )
        return replace(
            session,
            state=TourState.FLYING,
            current=origin,
            visited=frozenset({origin.id}),
            history=(origin.id,),
        )

    def advance(self, session: TourSession) -> TourSession:
        """Move to the nearest unvisited place.

        Only a FLYING tour moves; a tick that lands in any other state is a no-op.
        """
        if session.state != TourState.FLYING:
            return session

        # start() guarantees current has a location
        nxt = nearest_unvisited(session.current.location, self.candidates, session.visited)
        if nxt is None:
            logger.info(
                f"Tour {session.session_id} complete after {len(session.history)} stops",
                extra={"session_id": session.session_id},
            )
            return replace(session, state=TourState.COMPLETE)

        logger.debug(
            f"Tour {session.session_id} advancing to {nxt.id}",
            extra={"session_id": session.session_id, "poi_id": nxt.id},
        )
        return replace(
            session,
            current=nxt,
            visited=session.visited | {nxt.id},
            history=session.history + (nxt.id,),
        )

    def pause(self, session: TourSession) -> TourSession:
        if session.state != TourState.FLYING:
            raise TourStateError("pause", session.state.value)
        return replace(session, state=TourState.PAUSED)

    def resume(self, session: TourSession) -> TourSession:
        if session.state != TourState.PAUSED:
            raise TourStateError("resume", session.state.value)
        return replace(session, state=TourState.FLYING)

    def reset(self, session: TourSession) -> TourSession:
        return TourSession(session_id=session.session_id)
