import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core.context import build_context
from app.main import create_app
from tests.fakes import FakeSupabase


def auth_headers(token: str):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        supabase_url="http://supabase.test",
        supabase_key="anon-key",
        supabase_service_role_key=None,
        google_service_account=None,
        google_maps_api_key=None,
        resend_api_key=None,
        resend_from_email=None,
        aws_access_key_id=None,
        aws_secret_access_key=None,
        s3_bucket_name=None,
        rate_limit="1000/minute",
    )


@pytest.fixture
def context(settings, db):
    return build_context(settings, supabase=db)


@pytest.fixture
def client(context):
    return TestClient(create_app(context))


@pytest.fixture
def teams(db):
    """Two teams: alpha (owner alice, admin bob, member carol) and beta (owner dave)"""
    alpha = db.seed("teams", name="Alpha")
    beta = db.seed("teams", name="Beta")
    members = {
        "alice": (alpha, "owner"),
        "bob": (alpha, "admin"),
        "carol": (alpha, "member"),
        "dave": (beta, "owner"),
    }
    for name, (team, role) in members.items():
        db.add_user(f"token-{name}", f"user-{name}")
        db.seed("team_members", team_id=team["id"], user_id=f"user-{name}", role=role)
        db.seed("user_profiles", user_id=f"user-{name}", first_name=name.capitalize(), active_team_id=team["id"])
    return {"alpha": alpha["id"], "beta": beta["id"]}
