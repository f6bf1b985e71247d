import pytest
from pydantic import ValidationError

from app.core.casing import extract_resource_id, to_snake_keys
from app.modules.auth.schemas import MeResponse
from app.modules.shoots.schemas import ShootCreate, ShootResourcesUpdate, ShootResponse


def test_to_snake_keys_renames_top_level_keys_only():
    payload = {"equipmentIds": ["e1"], "participants": [{"personnelId": None, "name": "Alex"}]}
    assert to_snake_keys(payload) == {
        "equipment_ids": ["e1"],
        "participants": [{"personnelId": None, "name": "Alex"}],
    }


def test_nested_models_normalize_their_own_keys():
    update = ShootResourcesUpdate(participants=[{"personnelId": "p1", "name": "Mika", "role": "Model"}])
    assert update.participants[0].personnel_id == "p1"


def test_free_form_metadata_keeps_its_keys():
    me = MeResponse(
        id="u1",
        activeTeamId="t1",
        role="owner",
        userMetadata={"fullName": "Mika R", "avatarUrl": "https://img.example/m.png"},
    )
    assert me.user_metadata == {"fullName": "Mika R", "avatarUrl": "https://img.example/m.png"}
    assert me.model_dump(by_alias=True)["userMetadata"]["fullName"] == "Mika R"


def test_to_snake_keys_leaves_snake_case_alone():
    payload = {"equipment_ids": ["e1"], "prop_ids": []}
    assert to_snake_keys(payload) == payload


@pytest.mark.parametrize("item,expected", [
    ("e1", "e1"),
    ({"equipmentId": "e1"}, "e1"),
    ({"equipment_id": "e1"}, "e1"),
    ({"id": "e1", "name": "Softbox"}, "e1"),
    # join-row key wins over the row's own id
    ({"id": "row-9", "equipmentId": "e1"}, "e1"),
    ({"name": "no id"}, None),
    ("", None),
    (None, None),
])
def test_extract_resource_id(item, expected):
    assert extract_resource_id(item, ("equipment_id", "id")) == expected


def test_extract_resource_id_rejects_other_types():
    with pytest.raises(TypeError):
        extract_resource_id(42, ("id",))


def test_resources_update_accepts_mixed_shapes_and_casings():
    update = ShootResourcesUpdate(**{
        "equipmentIds": ["e1", {"equipmentId": "e2"}, {"id": "e3"}],
        "prop_ids": [{"prop_id": "p1"}],
        "costumeIds": [{"id": "c1", "characterName": "Zelda"}],
        "personnelIds": [{"personnelId": "x1"}],
        "participants": [{"personnelId": None, "name": "Alex", "role": "Model"}],
    })
    assert update.equipment_ids == ["e1", "e2", "e3"]
    assert update.prop_ids == ["p1"]
    assert update.costume_ids == ["c1"]
    assert update.personnel_ids == ["x1"]
    assert update.participants[0].personnel_id is None


def test_resources_update_defaults_to_empty():
    update = ShootResourcesUpdate()
    assert update.equipment_ids == []
    assert update.participants == []


def test_resources_update_keeps_duplicates():
    update = ShootResourcesUpdate(equipment_ids=["e1", "e1"])
    assert update.equipment_ids == ["e1", "e1"]


def test_resources_update_rejects_items_without_id():
    with pytest.raises(ValidationError):
        ShootResourcesUpdate(equipment_ids=[{"name": "Softbox"}])


def test_resources_update_requires_participant_name():
    with pytest.raises(ValidationError):
        ShootResourcesUpdate(participants=[{"personnelId": None, "role": "Model"}])


def test_instagram_links_json_string_is_parsed():
    shoot = ShootCreate(title="Forest", instagramLinks='["https://instagram.com/p/1"]')
    assert shoot.instagram_links == ["https://instagram.com/p/1"]


def test_instagram_links_invalid_json_is_rejected():
    with pytest.raises(ValidationError):
        ShootCreate(title="Forest", instagram_links="not json")


def test_response_serializes_camel_case():
    shoot = ShootResponse(
        id="s1", team_id="t1", user_id="u1", title="Forest",
        created_at="2024-01-01T00:00:00+00:00", is_public=True,
    )
    body = shoot.model_dump(by_alias=True)
    assert body["teamId"] == "t1"
    assert body["isPublic"] is True
    assert "team_id" not in body
