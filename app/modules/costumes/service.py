from app.core.repository import TeamScopedRepository
from app.modules.costumes.schemas import CostumeResponse


class CostumeService(TeamScopedRepository[CostumeResponse]):
    table = "costume_progress"
    entity_name = "Costume"
    response_model = CostumeResponse
