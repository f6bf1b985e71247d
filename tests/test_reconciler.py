import pytest
from postgrest.exceptions import APIError

from app.core.exceptions import InternalError, RequestValidationFailed
from app.modules.shoots.reconciler import AssociationReconciler
from app.modules.shoots.schemas import ShootResourcesUpdate


@pytest.fixture
def shoot(db, teams):
    return db.seed("shoots", team_id=teams["alpha"], user_id="user-alice", title="Forest", status="planning")


@pytest.fixture
def reconciler(db):
    return AssociationReconciler(db)


def apply(reconciler, shoot, teams, **body):
    return reconciler.apply(shoot["id"], teams["alpha"], ShootResourcesUpdate(**body))


def test_full_replace_drops_unlisted_associations(db, teams, shoot, reconciler):
    for equipment_id in ("e-old-1", "e-old-2"):
        db.seed("shoot_equipment", shoot_id=shoot["id"], equipment_id=equipment_id, quantity=3)
    db.seed("shoot_props", shoot_id=shoot["id"], prop_id="p-old")

    result = apply(reconciler, shoot, teams, equipmentIds=["e1"])

    equipment = db.rows("shoot_equipment", shoot_id=shoot["id"])
    assert [(r["equipment_id"], r["quantity"]) for r in equipment] == [("e1", 1)]
    assert db.rows("shoot_props", shoot_id=shoot["id"]) == []
    assert result.equipment == 1
    assert result.success is True


def test_other_shoots_are_untouched(db, teams, shoot, reconciler):
    other = db.seed("shoots", team_id=teams["alpha"], user_id="user-alice", title="Beach")
    db.seed("shoot_costumes", shoot_id=other["id"], costume_id="c-keep")

    apply(reconciler, shoot, teams, costumeIds=["c1"])

    assert [r["costume_id"] for r in db.rows("shoot_costumes", shoot_id=other["id"])] == ["c-keep"]


def test_duplicate_ids_produce_duplicate_rows(db, teams, shoot, reconciler):
    apply(reconciler, shoot, teams, equipmentIds=["e1", "e1"], propIds=["p1", "p1"])

    assert [r["equipment_id"] for r in db.rows("shoot_equipment", shoot_id=shoot["id"])] == ["e1", "e1"]
    assert len(db.rows("shoot_props", shoot_id=shoot["id"])) == 2


def test_manual_and_linked_participants_survive_unchanged(db, teams, shoot, reconciler):
    person = db.seed("personnel", team_id=teams["alpha"], name="Mika", email="mika@example.com")
    db.seed("shoot_participants", shoot_id=shoot["id"], personnel_id=None, name="Alex", role="Model", email=None)
    db.seed("shoot_participants", shoot_id=shoot["id"], personnel_id=person["id"], name="Mika", role="Photographer")

    apply(reconciler, shoot, teams, personnelIds=[], participants=[
        {"personnelId": None, "name": "Alex", "role": "Model"},
        {"personnelId": person["id"], "name": "Mika", "role": "Photographer"},
    ])

    rows = db.rows("shoot_participants", shoot_id=shoot["id"])
    assert sorted((r["personnel_id"] or "", r["name"], r["role"]) for r in rows) == sorted([
        ("", "Alex", "Model"),
        (person["id"], "Mika", "Photographer"),
    ])
    manual = [r for r in rows if r["name"] == "Alex"][0]
    assert manual["personnel_id"] is None


def test_supplementary_personnel_become_participants(db, teams, shoot, reconciler):
    person = db.seed("personnel", team_id=teams["alpha"], name="Mika", email="mika@example.com")

    result = apply(reconciler, shoot, teams, participants=[], personnelIds=[person["id"]])

    rows = db.rows("shoot_participants", shoot_id=shoot["id"])
    assert len(rows) == 1
    assert rows[0]["personnel_id"] == person["id"]
    assert rows[0]["role"] == "Participant"
    assert rows[0]["name"] == "Mika"
    assert result.participants == 1


def test_represented_personnel_are_not_added_twice(db, teams, shoot, reconciler):
    person = db.seed("personnel", team_id=teams["alpha"], name="Mika")

    apply(reconciler, shoot, teams,
          participants=[{"personnelId": person["id"], "name": "Mika", "role": "Stylist"}],
          personnelIds=[person["id"], person["id"]])

    rows = db.rows("shoot_participants", shoot_id=shoot["id"])
    assert [(r["personnel_id"], r["role"]) for r in rows] == [(person["id"], "Stylist")]


def test_unknown_and_foreign_personnel_are_skipped(db, teams, shoot, reconciler):
    foreign = db.seed("personnel", team_id=teams["beta"], name="Outsider")

    apply(reconciler, shoot, teams, personnelIds=["missing", foreign["id"]])

    assert db.rows("shoot_participants", shoot_id=shoot["id"]) == []


def test_plan_is_built_without_writing(db, teams, shoot, reconciler):
    person = db.seed("personnel", team_id=teams["alpha"], name="Mika")
    db.seed("shoot_equipment", shoot_id=shoot["id"], equipment_id="e-old", quantity=1)

    plan = reconciler.build_plan(shoot["id"], teams["alpha"], ShootResourcesUpdate(
        equipment_ids=["e1"], personnel_ids=[person["id"]],
    ))

    assert plan.equipment == [{"equipment_id": "e1", "quantity": 1}]
    assert plan.participants[0]["role"] == "Participant"
    assert [r["equipment_id"] for r in db.rows("shoot_equipment")] == ["e-old"]
    assert db.rpc_calls == []


def test_failure_leaves_previous_state_intact(db, teams, shoot, reconciler):
    db.seed("shoot_equipment", shoot_id=shoot["id"], equipment_id="e-old", quantity=1)
    db.seed("shoot_participants", shoot_id=shoot["id"], personnel_id=None, name="Alex", role="Model")
    db.fail_on("shoot_participants", "insert")

    with pytest.raises(InternalError):
        apply(reconciler, shoot, teams, equipmentIds=["e1"],
              participants=[{"name": "Sam", "role": "Assistant"}])

    assert [r["equipment_id"] for r in db.rows("shoot_equipment", shoot_id=shoot["id"])] == ["e-old"]
    assert [r["name"] for r in db.rows("shoot_participants", shoot_id=shoot["id"])] == ["Alex"]


def test_apply_sends_single_rpc(db, teams, shoot, reconciler):
    apply(reconciler, shoot, teams, equipmentIds=["e1"], propIds=["p1"], costumeIds=["c1"])

    assert len(db.rpc_calls) == 1
    name, params = db.rpc_calls[0]
    assert name == "replace_shoot_associations"
    assert params["p_shoot_id"] == shoot["id"]
    assert params["p_props"] == [{"prop_id": "p1"}]
    assert params["p_costumes"] == [{"costume_id": "c1"}]


def _raise_db_error(code, details=None):
    def handler(db, **params):
        raise APIError({"code": code, "message": "rejected", "details": details, "hint": None})
    return handler


@pytest.mark.parametrize("code,details,field", [
    ("23503", 'Key (equipment_id)=(3f1c0a52-0000-4000-8000-000000000000) is not present in table "equipment".',
     "equipmentIds"),
    ("23503", 'Key (prop_id)=(3f1c0a52-0000-4000-8000-000000000000) is not present in table "props".', "propIds"),
    ("22P02", None, "body"),
])
def test_unknown_or_malformed_ids_are_validation_errors(db, teams, shoot, reconciler, code, details, field):
    db.seed("shoot_equipment", shoot_id=shoot["id"], equipment_id="e-old", quantity=1)
    db.rpc_handlers["replace_shoot_associations"] = _raise_db_error(code, details)

    with pytest.raises(RequestValidationFailed) as excinfo:
        apply(reconciler, shoot, teams, equipmentIds=["not-a-uuid"], propIds=["p1"])

    assert excinfo.value.errors[0]["field"] == field
    assert [r["equipment_id"] for r in db.rows("shoot_equipment", shoot_id=shoot["id"])] == ["e-old"]


def test_other_database_errors_stay_internal(db, teams, shoot, reconciler):
    db.rpc_handlers["replace_shoot_associations"] = _raise_db_error("40001")

    with pytest.raises(InternalError):
        apply(reconciler, shoot, teams, equipmentIds=["e1"])
