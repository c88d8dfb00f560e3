import pytest

from record_interface import wrap


@pytest.fixture(autouse=True)
def _force_test_env(monkeypatch):
    # Make wrap() defaults deterministic regardless of the caller's shell
    monkeypatch.delenv("RECORD_INTERFACE_DEEP_COPY", raising=False)


@pytest.fixture()
def obj():
    return {
        "a": 1,
        "b": {
            "c": 2,
            "d": 3,
        },
        "e": [4, 5],
    }


@pytest.fixture()
def handle(obj):
    return wrap(obj)
