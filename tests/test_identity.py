from app.modules.teams.service import TeamService
from tests.conftest import auth_headers


def test_resolver_provisions_exactly_one_team(db):
    service = TeamService(db)

    first = service.get_user_team_id("user-new")
    second = service.get_user_team_id("user-new")

    assert first == second
    assert len(db.rows("teams")) == 1
    assert db.rows("teams")[0]["name"] == "My Team"
    membership = db.rows("team_members", user_id="user-new")
    assert len(membership) == 1
    assert membership[0]["role"] == "owner"
    assert db.rows("user_profiles", user_id="user-new")[0]["active_team_id"] == first


def test_personal_team_named_after_first_name(db):
    db.seed("user_profiles", user_id="user-ana", first_name="Ana")
    team_id = TeamService(db).get_user_team_id("user-ana")
    assert db.rows("teams", id=team_id)[0]["name"] == "Ana's Team"


def test_resolver_prefers_profile_active_team(db):
    one = db.seed("teams", name="One")
    two = db.seed("teams", name="Two")
    db.seed("team_members", team_id=one["id"], user_id="u1", role="member")
    db.seed("team_members", team_id=two["id"], user_id="u1", role="admin")
    db.seed("user_profiles", user_id="u1", active_team_id=two["id"])

    membership = TeamService(db).resolve_active_membership("u1")

    assert membership.team_id == two["id"]
    assert membership.role == "admin"


def test_resolver_falls_back_when_active_team_membership_is_gone(db):
    stale = db.seed("teams", name="Stale")
    current = db.seed("teams", name="Current")
    db.seed("team_members", team_id=current["id"], user_id="u1", role="member")
    db.seed("user_profiles", user_id="u1", active_team_id=stale["id"])

    team_id = TeamService(db).get_user_team_id("u1")

    assert team_id == current["id"]
    assert db.rows("user_profiles", user_id="u1")[0]["active_team_id"] == current["id"]
    assert len(db.rows("teams")) == 2


def test_missing_credentials_is_401(client):
    response = client.get("/api/team")
    assert response.status_code == 401


def test_invalid_token_is_401(client):
    response = client.get("/api/team", headers=auth_headers("nope"))
    assert response.status_code == 401


def test_first_request_provisions_team(client, db):
    db.add_user("token-new", "user-new")

    response = client.get("/api/team", headers=auth_headers("token-new"))

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "owner"
    assert body["name"] == "My Team"

    again = client.get("/api/team", headers=auth_headers("token-new"))
    assert again.json()["id"] == body["id"]
    assert len(db.rows("teams")) == 1


def test_session_cookie_authenticates(client, teams):
    response = client.post("/api/auth/session", json={"accessToken": "token-alice", "refreshToken": "r"})
    assert response.status_code == 200
    assert response.json() == {"userId": "user-alice"}
    assert "sb-access-token" in response.headers.get("set-cookie", "")

    client.cookies.set("sb-access-token", "token-alice")
    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["activeTeamId"] == teams["alpha"]
    assert me.json()["role"] == "owner"


def test_session_with_invalid_token_is_rejected(client):
    response = client.post("/api/auth/session", json={"access_token": "bogus"})
    assert response.status_code == 401


def test_me_returns_auth_metadata_unchanged(client, db, teams):
    db.users["token-alice"]["user_metadata"] = {"fullName": "Alice A", "avatar_url": "https://img.example/a.png"}

    me = client.get("/api/auth/me", headers=auth_headers("token-alice"))

    assert me.status_code == 200
    assert me.json()["userMetadata"] == {"fullName": "Alice A", "avatar_url": "https://img.example/a.png"}
