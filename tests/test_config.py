"""Settings tests: defaults, environment overrides, positive bounds."""

import pytest
from pydantic import ValidationError

from argument_forge.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.expansion_max_nodes == 64
    assert settings.oracle_call_timeout_seconds == 600.0
    assert settings.anthropic_max_retries == 3
    assert settings.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("EXPANSION_MAX_NODES", "5")
    monkeypatch.setenv("ORACLE_MODEL", "claude-test")
    settings = Settings(_env_file=None)
    assert settings.expansion_max_nodes == 5
    assert settings.oracle_model == "claude-test"


@pytest.mark.parametrize("field", ["expansion_max_nodes", "oracle_call_timeout_seconds"])
@pytest.mark.parametrize("value", [0, -1])
def test_non_positive_bounds_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
