from typing import List

from app.core.repository import TeamScopedRepository
from app.modules.equipment.schemas import EquipmentResponse


class EquipmentService(TeamScopedRepository[EquipmentResponse]):
    table = "equipment"
    entity_name = "Equipment"
    response_model = EquipmentResponse

    def list_available(self, team_id: str) -> List[EquipmentResponse]:
        return [item for item in self.list_for_team(team_id) if item.available]
