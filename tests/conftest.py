import pytest

from modinject.core.config import reload_config
from modinject.core.di import ModuleRegistry, reset_registry


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    monkeypatch.delenv('CONFIG_FILE', raising=False)
    reset_registry()
    reload_config()
    yield
    reset_registry()
    reload_config()


@pytest.fixture
def registry():
    return ModuleRegistry()
