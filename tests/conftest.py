import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from workboard import database
from workboard.client.api import BackendClient
from workboard.client.config import ClientSettings
from workboard.main import app

BASE_URL = "http://test"
PASSWORD = "s3cret-pass"


class MemoryBucket:
    """GridFS bucket stand-in keeping blobs in a dict."""

    def __init__(self):
        self.files = {}

    async def upload_from_stream(self, filename, source, metadata=None):
        file_id = ObjectId()
        self.files[file_id] = source.read()
        return file_id

    async def open_download_stream(self, file_id):
        return _MemoryGridOut(self.files[file_id])


class _MemoryGridOut:
    def __init__(self, data):
        self._data = data

    async def read(self):
        return self._data


@pytest.fixture
def db(monkeypatch):
    mock_db = AsyncMongoMockClient()["workboard_test"]
    monkeypatch.setattr(database, "db", mock_db)
    monkeypatch.setattr(database, "fs_bucket", MemoryBucket())
    return mock_db


@pytest.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as c:
        yield c


async def sign_up(client, email, role, full_name="Test User", company_name=""):
    response = await client.post("/users/register", json={
        "full_name": full_name,
        "email": email,
        "password": PASSWORD,
        "role": role,
        "company_name": company_name,
    })
    assert response.status_code == 200, response.text
    login = await client.post("/users/login", json={"email": email, "password": PASSWORD})
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


@pytest.fixture
async def employer(client):
    return await sign_up(client, "hr@khmerdigital.com", "employer", "Dara Hr", "Khmer Digital Solutions")


@pytest.fixture
async def other_employer(client):
    return await sign_up(client, "careers@browncoffee.com", "employer", "Brown Hr", "Brown Coffee")


@pytest.fixture
async def candidate(client):
    return await sign_up(client, "sokha@example.com", "candidate", "Sokha Chan")


@pytest.fixture
async def other_candidate(client):
    return await sign_up(client, "vanna@example.com", "candidate", "Vanna Kim")


def job_body(**overrides):
    body = {
        "title": "Junior Web Developer",
        "workplace": "Tuol Kork, Phnom Penh",
        "salary": "$500 - $800",
        "working_hours": "8:30 AM - 5:30 PM (Mon-Fri)",
        "type": "Full-time",
        "sector": "Technology",
        "description": "Build web apps for the local market.",
    }
    body.update(overrides)
    return body


async def post_job(client, headers, **overrides):
    response = await client.post("/jobs", json=job_body(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def apply(client, headers, job_id, uploaded_docs=None):
    response = await client.post("/applications", json={
        "job_id": job_id,
        "uploaded_docs": uploaded_docs or {},
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def api_factory(db):
    """BackendClients talking to the in-process app."""
    created = []

    def make(**settings):
        api = BackendClient(
            ClientSettings(base_url=BASE_URL, **settings),
            transport=ASGITransport(app=app),
        )
        created.append(api)
        return api

    yield make

    for api in created:
        await api.aclose()
