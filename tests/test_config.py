from __future__ import annotations

from pathlib import Path

import pytest

from spanpipe.config import AnalyzerConfig
from spanpipe.errors import ConfigurationError


def test_defaults():
    config = AnalyzerConfig.from_env({})
    assert config.max_workers == 1
    assert config.timeout is None
    assert config.no_entity_label == "O"
    assert config.tagsets_file is None


def test_environment_values():
    config = AnalyzerConfig.from_env({
        "SPANPIPE_MAX_WORKERS": "3",
        "SPANPIPE_TIMEOUT": "2.5",
        "SPANPIPE_NO_ENTITY_LABEL": "NONE",
        "SPANPIPE_TAGSETS": "extra.json",
    })
    assert config.max_workers == 3
    assert config.timeout == 2.5
    assert config.no_entity_label == "NONE"
    assert config.tagsets_file == Path("extra.json")


def test_overrides_win_unless_none():
    config = AnalyzerConfig.from_env({"SPANPIPE_MAX_WORKERS": "3"}, max_workers=5, timeout=None)
    assert config.max_workers == 5
    assert config.timeout is None


def test_invalid_environment_value():
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_env({"SPANPIPE_MAX_WORKERS": "many"})


@pytest.mark.parametrize("kwargs", [{"max_workers": 0}, {"timeout": -1}, {"no_entity_label": ""}])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig(**kwargs)
