"""
Tour session and tour plan schemas for API requests/responses
"""
from pydantic import BaseModel, Field
from typing import Optional

from heritage_map.core.tour import TourSession, TourState
from heritage_map.schemas.place import PlaceRead


class TourStartRequest(BaseModel):
    """Start a tour at the selected place"""
    place_id: str = Field(..., min_length=1)
    autoplay: bool = False


class TourSessionRead(BaseModel):
    session_id: str
    state: TourState
    current: Optional[PlaceRead] = None
    visited: list[str]
    history: list[str]
    autoplay: bool = False

    @classmethod
    def from_session(cls, session: TourSession, autoplay: bool = False) -> "TourSessionRead":
        current = PlaceRead(**session.current.to_dict()) if session.current else None
        return cls(
            session_id=session.session_id,
            state=session.state,
            current=current,
            visited=sorted(session.visited),
            history=list(session.history),
            autoplay=autoplay,
        )


class TourPlanEntry(BaseModel):
    id: str
    name: str
    city: Optional[str] = None


class TourPlanAddRequest(BaseModel):
    place_id: str = Field(..., min_length=1)
