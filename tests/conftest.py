import sys
from pathlib import Path

import pytest

# Add the repository root to sys.path so json_data_checker imports without installing
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from json_data_checker.store import CollectionStore  # noqa: E402


@pytest.fixture
def chat_document():
    return {"messages": [{"role": "user", "content": "hi"}]}


@pytest.fixture
def nested_record():
    return {
        "name": "alpha",
        "meta": {"tags": ["a", "b"], "score": 3, "owner": {"id": 7, "active": True}},
        "notes": None,
    }


@pytest.fixture
def store():
    return CollectionStore()


@pytest.fixture
def make_records():
    def _make(count):
        return [{"n": i} for i in range(count)]
    return _make
