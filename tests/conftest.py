"""Test configuration and fixtures."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from action_class.config import ActionSettings
from action_class.host import Host, InputFormatError, InputOptions


def _boolean_input(name: str, options: InputOptions | None = None) -> bool:
    raise InputFormatError(name)


@pytest.fixture
def host() -> Mock:
    """Provide a host with no inputs and no saved state."""
    mock_host = Mock(spec=Host)
    mock_host.get_input.return_value = ""
    mock_host.get_multiline_input.return_value = []
    mock_host.get_boolean_input.side_effect = _boolean_input
    mock_host.get_state.return_value = ""
    return mock_host


@pytest.fixture
def settings() -> ActionSettings:
    """Provide settings with the action.yml generator switch cleared."""
    return ActionSettings(_env_file=None, ACTION_YAML_GENERATOR="")


@pytest.fixture
def state_store(host: Mock) -> dict[str, str]:
    """Back the host's state channel with a dict that survives invocations."""
    store: dict[str, str] = {}
    host.get_state.side_effect = lambda name: store.get(name, "")
    host.save_state.side_effect = lambda name, value: store.__setitem__(name, value)
    return store
