"""
Tour plan service - the ordered list of places a consumer intends to visit
"""
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from heritage_map.models.consumer import ConsumerProfile
from heritage_map.services.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class TourPlanService:
    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogRepository(db)

    def list_places(self, consumer_id: str) -> List[dict]:
        profile = self.db.get(ConsumerProfile, consumer_id)
        if profile is None:
            return []
        # older rows may contain nulls from removed entries
        return [entry for entry in (profile.visit_places or []) if entry]

    def add_place(self, consumer_id: str, place_id: str) -> List[dict]:
        """
        Append a place to the consumer's plan

        Adding a place that is already planned leaves the plan unchanged.

        Args:
            consumer_id: Consumer profile ID (created on first write)
            place_id: Place to add

        Returns:
            The updated plan
        """
        place = self.catalog.get_place(place_id)
        plan = self.list_places(consumer_id)
        if any(entry.get("id") == place_id for entry in plan):
            return plan

        plan = plan + [{
            "id": place.id,
            "name": place.name,
            "city": place.attributes.get("city"),
        }]
        self._save(consumer_id, plan)
        logger.info(
            f"Added place {place_id} to tour plan of {consumer_id}",
            extra={"consumer_id": consumer_id, "place_id": place_id},
        )
        return plan

    def remove_place(self, consumer_id: str, place_id: str) -> List[dict]:
        plan = self.list_places(consumer_id)
        updated = [entry for entry in plan if entry.get("id") != place_id]
        if len(updated) != len(plan):
            self._save(consumer_id, updated)
            logger.info(
                f"Removed place {place_id} from tour plan of {consumer_id}",
                extra={"consumer_id": consumer_id, "place_id": place_id},
            )
        return updated

    def _save(self, consumer_id: str, plan: List[dict]) -> None:
        profile = self.db.get(ConsumerProfile, consumer_id)
        if profile is None:
            profile = ConsumerProfile(id=consumer_id)
            self.db.add(profile)
        profile.visit_places = plan
        profile.updated_at = datetime.now(timezone.utc)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
