import pytest

from wg_builder.registry import PeerRegistry
from wg_builder.session import ConfigSession


@pytest.fixture
def registry():
    return PeerRegistry()


@pytest.fixture
def session():
    return ConfigSession()


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "data" / "state.json"
