from app.core.repository import TeamScopedRepository
from app.modules.props.schemas import PropResponse


class PropService(TeamScopedRepository[PropResponse]):
    table = "props"
    entity_name = "Prop"
    response_model = PropResponse
