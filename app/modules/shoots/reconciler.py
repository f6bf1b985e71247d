"""
Full-replace reconciliation of a shoot's associations.

The desired state submitted by the client becomes the exact set of
equipment, prop and costume join rows and the exact participant list for
the shoot. Planning happens here; the delete-then-recreate itself runs in
the ``replace_shoot_associations`` Postgres function so it commits or rolls
back as one transaction.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from postgrest.exceptions import APIError
from supabase import Client

from app.core.exceptions import AppError, InternalError, RequestValidationFailed
from app.modules.personnel.service import PersonnelService
from app.modules.shoots.schemas import (
    SUPPLEMENTARY_ROLE, ShootResourcesUpdate, ResourcesUpdateResult
)

logger = logging.getLogger(__name__)

REPLACE_FUNCTION = "replace_shoot_associations"

# Postgres codes for a malformed uuid and a missing referenced row
INVALID_REFERENCE_CODES = ("22P02", "23503")
REFERENCE_FIELDS = {
    "equipment_id": "equipmentIds",
    "prop_id": "propIds",
    "costume_id": "costumeIds",
    "personnel_id": "participants",
}


def _invalid_reference(error: APIError) -> RequestValidationFailed:
    match = re.search(r"Key \((\w+)\)", error.details or "")
    field = REFERENCE_FIELDS.get(match.group(1), "body") if match else "body"
    return RequestValidationFailed(errors=[{
        "field": field,
        "message": "Contains an id that is malformed or does not exist",
    }])


@dataclass
class AssociationPlan:
    shoot_id: str
    equipment: List[Dict[str, Any]] = field(default_factory=list)
    props: List[Dict[str, Any]] = field(default_factory=list)
    costumes: List[Dict[str, Any]] = field(default_factory=list)
    participants: List[Dict[str, Any]] = field(default_factory=list)

    def to_rpc_params(self) -> Dict[str, Any]:
        return {
            "p_shoot_id": self.shoot_id,
            "p_equipment": self.equipment,
            "p_props": self.props,
            "p_costumes": self.costumes,
            "p_participants": self.participants,
        }

    def summary(self) -> ResourcesUpdateResult:
        return ResourcesUpdateResult(
            success=True,
            equipment=len(self.equipment),
            props=len(self.props),
            costumes=len(self.costumes),
            participants=len(self.participants),
        )


class AssociationReconciler:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.personnel = PersonnelService(supabase)

    def build_plan(self, shoot_id: str, team_id: str, update: ShootResourcesUpdate) -> AssociationPlan:
        """Rows that will exist for the shoot once the update is applied.

        Catalog ids are taken as submitted, duplicates included. Submitted
        participants are kept exactly, manual ones (no personnel_id) too.
        Personnel ids not already represented by a participant are looked
        up in the team and added with the default role; unknown ids are
        skipped.
        """
        plan = AssociationPlan(shoot_id=shoot_id)
        plan.equipment = [{"equipment_id": eid, "quantity": 1} for eid in update.equipment_ids]
        plan.props = [{"prop_id": pid} for pid in update.prop_ids]
        plan.costumes = [{"costume_id": cid} for cid in update.costume_ids]

        for participant in update.participants:
            plan.participants.append({
                "personnel_id": participant.personnel_id,
                "name": participant.name,
                "role": participant.role,
                "email": participant.email,
            })

        represented = {p["personnel_id"] for p in plan.participants if p["personnel_id"]}
        missing = [pid for pid in dict.fromkeys(update.personnel_ids) if pid not in represented]
        if missing:
            found = {person.id: person for person in self.personnel.list_by_ids(missing, team_id)}
            for personnel_id in missing:
                person = found.get(personnel_id)
                if person is None:
                    logger.debug(f"Skipping unknown personnel {personnel_id} for shoot {shoot_id}")
                    continue
                plan.participants.append({
                    "personnel_id": person.id,
                    "name": person.name,
                    "role": SUPPLEMENTARY_ROLE,
                    "email": person.email,
                })

        return plan

    def apply(self, shoot_id: str, team_id: str, update: ShootResourcesUpdate) -> ResourcesUpdateResult:
        """Replace the shoot's associations in a single transaction"""
        plan = self.build_plan(shoot_id, team_id, update)
        try:
            self.supabase.rpc(REPLACE_FUNCTION, plan.to_rpc_params()).execute()
        except AppError:
            raise
        except APIError as e:
            if e.code in INVALID_REFERENCE_CODES:
                logger.info(f"Rejected associations for shoot {shoot_id}: {e.message}")
                raise _invalid_reference(e) from e
            logger.exception(f"Failed to replace associations for shoot {shoot_id}: {e}")
            raise InternalError("Failed to update shoot resources") from e
        except Exception as e:
            logger.exception(f"Failed to replace associations for shoot {shoot_id}: {e}")
            raise InternalError("Failed to update shoot resources") from e

        logger.info(
            f"Replaced associations for shoot {shoot_id}: "
            f"{len(plan.equipment)} equipment, {len(plan.props)} props, "
            f"{len(plan.costumes)} costumes, {len(plan.participants)} participants"
        )
        return plan.summary()
