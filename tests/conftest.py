import httpx
import pytest
from fastapi.testclient import TestClient

from class_store import ClassStore
from database import JsonDatabase
from gateway import RemoteGateway
from main import create_app
from student_store import StudentStore


def refuse_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def json_db(tmp_path):
    return JsonDatabase(str(tmp_path / "db.json"))


@pytest.fixture
def client(json_db):
    with TestClient(create_app(json_db)) as c:
        yield c


@pytest.fixture
def gateway(client):
    return RemoteGateway(client=client)


@pytest.fixture
def failing_gateway():
    http = httpx.Client(base_url="http://api.invalid", transport=httpx.MockTransport(refuse_connection))
    yield RemoteGateway(client=http)
    http.close()


@pytest.fixture
def store(gateway):
    return StudentStore(gateway)


@pytest.fixture
def offline_store(failing_gateway):
    return StudentStore(failing_gateway)


@pytest.fixture
def class_store():
    return ClassStore()
