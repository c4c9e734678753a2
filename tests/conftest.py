import pytest
from fastapi.testclient import TestClient

from stockpile_api.config import Settings
from stockpile_api.database import Database
from stockpile_api.main import create_app
from stockpile_api.models.users import Role
from stockpile_api.stores.users import UserStore

PASSWORD = "s3cret-pass"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        JWT_SECRET="test-secret",
        JWT_EXPIRES_IN="1h",
        DATABASE_URL="sqlite://",
        DB_AUTO_CREATE=False,
        CORS_ORIGINS="",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def users(database):
    """One account per role, keyed by role name."""
    created = {}
    with database.session() as db:
        store = UserStore(db)
        for role in Role:
            user = store.create(
                email=f"{role.value}@example.com",
                password=PASSWORD,
                name=f"{role.value.title()} User",
                role=role,
            )
            created[role.value] = {"id": user.id, "email": user.email, "name": user.name}
    return created


@pytest.fixture
def login(client, users):
    def _login(role):
        resp = client.post("/auth/login", json={"email": users[role]["email"], "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return _login


@pytest.fixture
def auth_headers(login):
    def _headers(role):
        return {"Authorization": f"Bearer {login(role)}"}

    return _headers


@pytest.fixture
def stockpile_payload():
    return {
        "name": "North Pile",
        "material": "Gravel",
        "grade": "A",
        "length": 10.5,
        "width": 4.0,
        "height": 2.25,
        "volume": 80.0,
        "location": {"type": "Point", "coordinates": [18.0686, 59.3293]},
    }
