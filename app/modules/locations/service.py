from app.core.repository import TeamScopedRepository
from app.modules.locations.schemas import LocationResponse


class LocationService(TeamScopedRepository[LocationResponse]):
    table = "locations"
    entity_name = "Location"
    response_model = LocationResponse
