from app.core.repository import TeamScopedRepository
from app.modules.personnel.schemas import PersonnelResponse


class PersonnelService(TeamScopedRepository[PersonnelResponse]):
    table = "personnel"
    entity_name = "Personnel"
    response_model = PersonnelResponse
