import pytest
from fastapi.testclient import TestClient

from bank import QuestionStore
from main import create_app
from questions import QUESTIONS
from validator import require_valid


@pytest.fixture
def store():
    return QuestionStore(seed=[require_valid(q) for q in QUESTIONS])


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


@pytest.fixture
def seed_dir(tmp_path, monkeypatch):
    d = tmp_path / "questions"
    d.mkdir()
    monkeypatch.setenv("QUESTION_DATA_DIR", str(d))
    return d
