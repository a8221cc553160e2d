import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from quizdeck.core.database import DOCUMENT_MODELS


def make_questions(module_name, count=3):
    """Question payloads as the admin upload sends them"""
    return [
        {
            "moduleName": module_name,
            "question": f"{module_name} question {n}?",
            "options": [f"option {n}.a", f"option {n}.b", f"option {n}.c"],
            "correct": n % 3,
            "explanation": f"Because of rule {n}.",
        }
        for n in range(count)
    ]


@pytest.fixture
async def db():
    """Fresh in-memory MongoDB with the Beanie models registered."""
    client = AsyncMongoMockClient()
    database = client["quizdeck_test"]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture
def app(tmp_path):
    from main import make_app

    return make_app(frontend_dir=str(tmp_path / "no-frontend"))


@pytest.fixture
async def client(db, app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
