import json
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import Settings
from todo_api.storage import JsonFileStorage
from todo_api.utils import format_timestamp, utc_now

SEED_IDS = [
    "01507581-9d12-a4c4-06bb-19d539a11189",
    "19d539a11189-bb60-u663-8sd4-01507581",
    "19d539a11189-4a60-3a4c-4434-01507581",
    "7895as2s4c-4a60-3a4c-7acc-895as1cc85",
]


def make_seed_todos(base=None):
    """
    Four todos with due dates a week apart: two weeks ago, one week ago,
    `base` and a week after `base`. Each was created a week before its due date.
    """
    base = base or utc_now() - timedelta(hours=1)
    rows = [
        (SEED_IDS[0], "Learn to use Adobe Photoshop", True),
        (SEED_IDS[1], "Buy 2 Cartons of Milk", True),
        (SEED_IDS[2], "Learn to juggle", False),
        (SEED_IDS[3], "Renew Passport", False),
    ]
    todos = []
    for i, (todo_id, name, completed) in enumerate(rows):
        due = base + timedelta(days=(i + 2 - len(rows)) * 7)
        todos.append(
            {
                "id": todo_id,
                "name": name,
                "completed": completed,
                "due": format_timestamp(due),
                "created": format_timestamp(due - timedelta(days=7)),
            }
        )
    return todos


@pytest.fixture
def seed_todos():
    return make_seed_todos()


@pytest.fixture
def store_path(tmp_path, seed_todos):
    path = tmp_path / "todos.json"
    path.write_text(json.dumps(seed_todos, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def storage(store_path):
    return JsonFileStorage(str(store_path))


@pytest.fixture
def client(store_path):
    app = create_app(Settings(json_path=str(store_path)))
    return TestClient(app)
