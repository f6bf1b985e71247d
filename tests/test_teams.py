from tests.conftest import auth_headers

ALICE = auth_headers("token-alice")
BOB = auth_headers("token-bob")
CAROL = auth_headers("token-carol")
DAVE = auth_headers("token-dave")


def member_id(db, team_id, user_id):
    return db.rows("team_members", team_id=team_id, user_id=user_id)[0]["id"]


def test_get_active_team(client, teams):
    response = client.get("/api/team", headers=CAROL)
    assert response.status_code == 200
    assert response.json()["id"] == teams["alpha"]
    assert response.json()["role"] == "member"


def test_owner_of_single_team_cannot_delete_it(client, db, teams):
    response = client.delete("/api/team", headers=DAVE)

    assert response.status_code == 400
    assert "at least one team" in response.json()["detail"]
    assert db.rows("teams", id=teams["beta"])


def test_owner_of_two_teams_can_delete_active_one(client, db, teams):
    created = client.post("/api/team", headers=DAVE, json={"name": "Beta Two"})
    assert created.status_code == 201
    second = created.json()["id"]
    # creating a team makes it active; switch back so the deleted team is the active one
    assert client.put("/api/user/active-team", headers=DAVE, json={"teamId": teams["beta"]}).status_code == 200
    db.seed("team_invites", team_id=teams["beta"], invite_code="beta-code", created_by="user-dave")
    db.seed("shoots", team_id=teams["beta"], user_id="user-dave", title="Beach", status="idea")

    response = client.delete(f"/api/team/{teams['beta']}", headers=DAVE)

    assert response.status_code == 200
    assert db.rows("teams", id=teams["beta"]) == []
    assert db.rows("team_members", team_id=teams["beta"]) == []
    assert db.rows("team_invites", team_id=teams["beta"]) == []
    assert db.rows("shoots", team_id=teams["beta"]) == []
    assert db.rows("user_profiles", user_id="user-dave")[0]["active_team_id"] == second


def test_failed_team_delete_keeps_members(client, db, teams):
    assert client.post("/api/team", headers=ALICE, json={"name": "Alpha Two"}).status_code == 201
    db.seed("team_invites", team_id=teams["alpha"], invite_code="alpha-code", created_by="user-alice")
    db.fail_on("teams", "delete")

    response = client.delete(f"/api/team/{teams['alpha']}", headers=ALICE)

    assert response.status_code == 500
    assert db.rows("teams", id=teams["alpha"])
    assert len(db.rows("team_members", team_id=teams["alpha"])) == 3
    assert len(db.rows("team_invites", team_id=teams["alpha"])) == 1


def test_admin_cannot_delete_team(client, teams):
    assert client.delete("/api/team", headers=BOB).status_code == 403


def test_member_cannot_rename_team(client, teams):
    assert client.patch("/api/team", headers=CAROL, json={"name": "Hijacked"}).status_code == 403


def test_admin_renames_team(client, db, teams):
    response = client.patch("/api/team", headers=BOB, json={"name": "  Alpha Prime "})
    assert response.status_code == 200
    assert db.rows("teams", id=teams["alpha"])[0]["name"] == "Alpha Prime"


def test_blank_team_name_rejected(client, teams):
    response = client.post("/api/team", headers=ALICE, json={"name": "   "})
    assert response.status_code == 400


def test_non_member_sees_team_as_missing(client, teams):
    assert client.get(f"/api/team/{teams['alpha']}", headers=DAVE).status_code == 404
    assert client.get(f"/api/team/{teams['alpha']}/members", headers=DAVE).status_code == 404


def test_members_include_profile_names(client, teams):
    response = client.get(f"/api/team/{teams['alpha']}/members", headers=CAROL)
    assert response.status_code == 200
    assert sorted(m["firstName"] for m in response.json()) == ["Alice", "Bob", "Carol"]


def test_invite_round_trip(client, db, teams):
    invite = client.post(f"/api/team/{teams['alpha']}/invite", headers=BOB)
    assert invite.status_code == 201
    code = invite.json()["inviteCode"]

    joined = client.post("/api/team/join", headers=DAVE, json={"inviteCode": code})
    assert joined.status_code == 201
    assert joined.json()["id"] == teams["alpha"]

    rows = db.rows("team_members", team_id=teams["alpha"], user_id="user-dave")
    assert len(rows) == 1
    assert rows[0]["role"] == "member"
    assert db.rows("user_profiles", user_id="user-dave")[0]["active_team_id"] == teams["alpha"]

    again = client.post("/api/team/join", headers=DAVE, json={"invite_code": code})
    assert again.status_code == 400
    assert len(db.rows("team_members", team_id=teams["alpha"], user_id="user-dave")) == 1


def test_unknown_invite_code(client, teams):
    assert client.post("/api/team/join", headers=DAVE, json={"inviteCode": "nope"}).status_code == 404


def test_new_invite_replaces_old(client, db, teams):
    first = client.post(f"/api/team/{teams['alpha']}/invite", headers=ALICE).json()["inviteCode"]
    second = client.post(f"/api/team/{teams['alpha']}/invite", headers=ALICE).json()["inviteCode"]

    assert first != second
    assert len(db.rows("team_invites", team_id=teams["alpha"])) == 1
    assert client.get(f"/api/team/{teams['alpha']}/invite", headers=ALICE).json()["inviteCode"] == second


def test_member_cannot_create_invite(client, teams):
    assert client.post(f"/api/team/{teams['alpha']}/invite", headers=CAROL).status_code == 403


def test_revoke_invite(client, db, teams):
    client.post(f"/api/team/{teams['alpha']}/invite", headers=ALICE)
    assert client.delete(f"/api/team/{teams['alpha']}/invite", headers=ALICE).status_code == 204
    assert client.get(f"/api/team/{teams['alpha']}/invite", headers=ALICE).status_code == 404


def test_admin_promotes_member_but_not_to_owner(client, db, teams):
    carol = member_id(db, teams["alpha"], "user-carol")

    assert client.patch(f"/api/team/{teams['alpha']}/members/{carol}", headers=BOB, json={"role": "owner"}).status_code == 403
    response = client.patch(f"/api/team/{teams['alpha']}/members/{carol}", headers=BOB, json={"role": "admin"})
    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_admin_cannot_change_owner_or_admin(client, db, teams):
    db.seed("team_members", team_id=teams["alpha"], user_id="user-erin", role="admin")
    alice = member_id(db, teams["alpha"], "user-alice")
    erin = member_id(db, teams["alpha"], "user-erin")

    assert client.patch(f"/api/team/{teams['alpha']}/members/{alice}", headers=BOB, json={"role": "member"}).status_code == 403
    assert client.patch(f"/api/team/{teams['alpha']}/members/{erin}", headers=BOB, json={"role": "member"}).status_code == 403


def test_owner_changes_admin_role(client, db, teams):
    bob = member_id(db, teams["alpha"], "user-bob")
    response = client.patch(f"/api/team/{teams['alpha']}/members/{bob}", headers=ALICE, json={"role": "member"})
    assert response.status_code == 200
    assert db.rows("team_members", id=bob)[0]["role"] == "member"


def test_cannot_change_own_role(client, db, teams):
    alice = member_id(db, teams["alpha"], "user-alice")
    response = client.patch(f"/api/team/{teams['alpha']}/members/{alice}", headers=ALICE, json={"role": "member"})
    assert response.status_code == 400


def test_invalid_role_rejected(client, db, teams):
    carol = member_id(db, teams["alpha"], "user-carol")
    response = client.patch(f"/api/team/{teams['alpha']}/members/{carol}", headers=ALICE, json={"role": "superuser"})
    assert response.status_code == 400


def test_remove_member(client, db, teams):
    carol = member_id(db, teams["alpha"], "user-carol")
    assert client.delete(f"/api/team/{teams['alpha']}/members/{carol}", headers=BOB).status_code == 204
    assert db.rows("team_members", id=carol) == []


def test_member_cannot_remove_anyone(client, db, teams):
    bob = member_id(db, teams["alpha"], "user-bob")
    assert client.delete(f"/api/team/{teams['alpha']}/members/{bob}", headers=CAROL).status_code == 403


def test_sole_owner_cannot_leave(client, teams):
    response = client.delete("/api/team/leave", headers=ALICE)
    assert response.status_code == 400


def test_member_leaves_and_active_team_is_cleared(client, db, teams):
    response = client.delete("/api/team/leave", headers=CAROL)

    assert response.status_code == 200
    assert db.rows("team_members", team_id=teams["alpha"], user_id="user-carol") == []
    assert db.rows("user_profiles", user_id="user-carol")[0]["active_team_id"] is None


def test_user_teams_lists_active_flag(client, db, teams):
    client.post("/api/team", headers=CAROL, json={"name": "Carol Solo"})
    response = client.get("/api/user/teams", headers=CAROL)

    assert response.status_code == 200
    teams_by_name = {t["name"]: t for t in response.json()}
    assert teams_by_name["Carol Solo"]["isActive"] is True
    assert teams_by_name["Carol Solo"]["role"] == "owner"
    assert teams_by_name["Alpha"]["isActive"] is False


def test_switch_to_foreign_team_is_not_found(client, teams):
    response = client.put("/api/user/active-team", headers=CAROL, json={"teamId": teams["beta"]})
    assert response.status_code == 404
