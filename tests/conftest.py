import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TF_KEY_NAME", raising=False)
    monkeypatch.delenv("TF_STATE", raising=False)
