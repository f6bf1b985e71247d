import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from supabase import Client

from app.core.casing import extract_resource_id
from app.core.exceptions import AppError, NotFoundError, RequestValidationFailed
from app.core.repository import TeamScopedRepository
from app.modules.costumes.service import CostumeService
from app.modules.equipment.service import EquipmentService
from app.modules.locations.service import LocationService
from app.modules.personnel.service import PersonnelService
from app.modules.props.service import PropService
from app.modules.shoots.schemas import (
    ShootResponse, ReferenceResponse, ParticipantResponse,
    ShootEquipmentResponse, ShootPropResponse, ShootCostumeResponse,
    PublicShootResponse, PublicLocation, PublicParticipant
)

logger = logging.getLogger(__name__)


class ShootService(TeamScopedRepository[ShootResponse]):
    """Shoots plus the rows hanging off them.

    Sub-resource tables carry no team_id; every access goes through the
    owning shoot, which is loaded under the caller's team first.
    """

    table = "shoots"
    entity_name = "Shoot"
    response_model = ShootResponse

    def __init__(self, supabase: Client):
        super().__init__(supabase)
        self.equipment = EquipmentService(supabase)
        self.props = PropService(supabase)
        self.costumes = CostumeService(supabase)
        self.locations = LocationService(supabase)
        self.personnel = PersonnelService(supabase)

    # Shoots

    def _check_location(self, location_id: Optional[str], team_id: str) -> None:
        if location_id and not self.locations.get(location_id, team_id):
            raise RequestValidationFailed(
                "Invalid location",
                errors=[{"field": "locationId", "message": "Location not found in this team"}]
            )

    def create_shoot(self, data: Dict[str, Any], user_id: str, team_id: str) -> ShootResponse:
        self._check_location(data.get("location_id"), team_id)
        return self.create({**data, "user_id": user_id, "team_id": team_id})

    def update_shoot(self, shoot_id: str, team_id: str, partial: Dict[str, Any]) -> ShootResponse:
        self._check_location(partial.get("location_id"), team_id)
        shoot = self.update(shoot_id, team_id, partial)
        if shoot is None:
            raise NotFoundError("Shoot not found")
        return shoot

    def set_integration_fields(self, shoot_id: str, team_id: str, fields: Dict[str, Any]) -> ShootResponse:
        """Record (or clear) calendar/docs identifiers after an integration call"""
        return self.update_shoot(shoot_id, team_id, fields)

    def delete_shoot(self, shoot_id: str, team_id: str) -> ShootResponse:
        """Delete a shoot; join rows, participants and references cascade.
        Returns the deleted shoot so callers can clean up external state."""
        shoot = self.get_or_404(shoot_id, team_id)
        if not self.delete(shoot_id, team_id):
            raise NotFoundError("Shoot not found")
        logger.info(f"Shoot {shoot_id} deleted from team {team_id}")
        return shoot

    def list_shoots(self, team_id: str, status: Optional[str] = None) -> List[ShootResponse]:
        shoots = self.list_for_team(team_id)
        if status:
            shoots = [shoot for shoot in shoots if shoot.status == status]
        return shoots

    # Child rows

    def _select_children(self, table: str, shoot_id: str, order: bool = True) -> List[Dict[str, Any]]:
        try:
            query = self.supabase.table(table).select("*").eq("shoot_id", shoot_id)
            if order:
                query = query.order("created_at")
            return query.execute().data or []
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("load", e) from e

    def _insert_child(self, table: str, row: Dict[str, Any], model: Type[BaseModel]):
        try:
            result = self.supabase.table(table).insert(row).execute()
            if not result.data:
                raise self._wrap("insert", RuntimeError(f"empty insert result for {table}"))
            return model(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("insert", e) from e

    def _delete_child(self, table: str, row_id: str, team_id: str, label: str) -> None:
        """Delete a child row after confirming its shoot belongs to team_id"""
        try:
            result = self.supabase.table(table)\
                .select("id, shoot_id")\
                .eq("id", row_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise self._wrap("load", e) from e

        if not result.data or not self.get(result.data[0]["shoot_id"], team_id):
            raise NotFoundError(f"{label} not found")

        try:
            self.supabase.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            raise self._wrap("delete", e) from e

    # References

    def list_references(self, shoot_id: str) -> List[ReferenceResponse]:
        return [ReferenceResponse(**row) for row in self._select_children("shoot_references", shoot_id)]

    def add_reference(self, shoot_id: str, data: Dict[str, Any]) -> ReferenceResponse:
        return self._insert_child("shoot_references", {**data, "shoot_id": shoot_id}, ReferenceResponse)

    def delete_reference(self, reference_id: str, team_id: str) -> None:
        self._delete_child("shoot_references", reference_id, team_id, "Reference")

    # Participants

    def list_participants(self, shoot_id: str) -> List[ParticipantResponse]:
        return [ParticipantResponse(**row) for row in self._select_children("shoot_participants", shoot_id)]

    def add_participant(self, shoot_id: str, team_id: str, data: Dict[str, Any]) -> ParticipantResponse:
        personnel_id = data.get("personnel_id")
        if personnel_id:
            if not self.personnel.get(personnel_id, team_id):
                raise NotFoundError("Personnel not found")
        return self._insert_child("shoot_participants", {**data, "shoot_id": shoot_id}, ParticipantResponse)

    def delete_participant(self, participant_id: str, team_id: str) -> None:
        self._delete_child("shoot_participants", participant_id, team_id, "Participant")

    # Catalog associations

    def _associated_ids(self, table: str, key: str, shoot_id: str) -> List[str]:
        rows = self._select_children(table, shoot_id, order=False)
        ids = []
        for row in rows:
            resource_id = extract_resource_id(row, (key,))
            if resource_id:
                ids.append(resource_id)
        return ids

    def _resolve_in_order(self, ids: List[str], repository: TeamScopedRepository, team_id: str) -> list:
        """Catalog objects for ids, in join-row order, limited to team_id"""
        found = {item.id: item for item in repository.list_by_ids(ids, team_id)}
        return [found[i] for i in dict.fromkeys(ids) if i in found]

    def list_equipment(self, shoot_id: str, team_id: str):
        ids = self._associated_ids("shoot_equipment", "equipment_id", shoot_id)
        return self._resolve_in_order(ids, self.equipment, team_id)

    def list_props(self, shoot_id: str, team_id: str):
        ids = self._associated_ids("shoot_props", "prop_id", shoot_id)
        return self._resolve_in_order(ids, self.props, team_id)

    def list_costumes(self, shoot_id: str, team_id: str):
        ids = self._associated_ids("shoot_costumes", "costume_id", shoot_id)
        return self._resolve_in_order(ids, self.costumes, team_id)

    def add_equipment(self, shoot_id: str, team_id: str, equipment_id: str, quantity: int = 1) -> ShootEquipmentResponse:
        self.equipment.get_or_404(equipment_id, team_id)
        row = {"shoot_id": shoot_id, "equipment_id": equipment_id, "quantity": quantity}
        return self._insert_child("shoot_equipment", row, ShootEquipmentResponse)

    def add_prop(self, shoot_id: str, team_id: str, prop_id: str) -> ShootPropResponse:
        self.props.get_or_404(prop_id, team_id)
        return self._insert_child("shoot_props", {"shoot_id": shoot_id, "prop_id": prop_id}, ShootPropResponse)

    def add_costume(self, shoot_id: str, team_id: str, costume_id: str) -> ShootCostumeResponse:
        self.costumes.get_or_404(costume_id, team_id)
        return self._insert_child("shoot_costumes", {"shoot_id": shoot_id, "costume_id": costume_id}, ShootCostumeResponse)

    # Public sharing

    def get_public_shoot(self, shoot_id: str) -> PublicShootResponse:
        """Unauthenticated view of a shoot flagged is_public. Emails are never included."""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", shoot_id)\
                .eq("is_public", True)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise self._wrap("load", e) from e

        if not result.data:
            raise NotFoundError("Shoot not found")
        shoot = ShootResponse(**result.data[0])

        location = None
        if shoot.location_id:
            found = self.locations.get(shoot.location_id, shoot.team_id)
            if found:
                location = PublicLocation(
                    name=found.name,
                    address=found.address,
                    latitude=found.latitude,
                    longitude=found.longitude,
                )

        return PublicShootResponse(
            id=shoot.id,
            title=shoot.title,
            status=shoot.status,
            date=shoot.date,
            time=shoot.time,
            duration_minutes=shoot.duration_minutes,
            description=shoot.description,
            color=shoot.color,
            instagram_links=shoot.instagram_links,
            location=location,
            references=self.list_references(shoot.id),
            participants=[
                PublicParticipant(name=p.name, role=p.role)
                for p in self.list_participants(shoot.id)
            ],
        )
