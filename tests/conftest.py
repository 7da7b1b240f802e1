import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, Database
from chat.llm import get_llm_client
from seed_locations import seed_locations


class StubLLM:
    """Stands in for the completion service."""

    configured = True

    def __init__(self):
        self.reply = "Looks safe, but never enter passwords on unknown sites."
        self.error = None
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def database():
    database = Database("sqlite://", poolclass=StaticPool)
    assert database.connect()
    db = database.session()
    seed_locations(db)
    db.close()
    app.state.database = database
    yield database
    Base.metadata.drop_all(bind=database.engine)
    database.dispose()


@pytest.fixture
def llm():
    stub = StubLLM()
    app.dependency_overrides[get_llm_client] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_llm_client, None)


@pytest.fixture
def client(database, llm):
    return TestClient(app)


@pytest.fixture
def login(client):
    def _login(email="alice@example.com", password="secret", name=None):
        response = client.post("/auth/login", json={"email": email, "password": password, "name": name})
        assert response.status_code == 200, response.text
        # the cookie would otherwise authenticate later requests on its own
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


@pytest.fixture
def start_session(client):
    def _start(headers, url="https://example.org/page", **snapshot):
        response = client.post("/browse/start", json={"url": url, **snapshot}, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()
    return _start
