"""
Configuration classes for spanpipe.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "SPANPIPE_"


@dataclass
class AnalyzerConfig:
    """Configuration for the Analyzer."""
    max_workers: int = 1  # Worker threads running pipelines; invocations per pipeline are serialised regardless
    timeout: Optional[float] = None  # Seconds to wait for a pipeline, None waits forever
    no_entity_label: str = "O"  # Raw NER value meaning "no entity"
    poll_interval: float = 0.05  # How often a bounded wait checks for cancellation
    tagsets_file: Optional[Path] = None  # Optional JSON file with extra tag sets

    def __post_init__(self):
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1 (got {self.max_workers})")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive (got {self.timeout})")
        if not self.no_entity_label:
            raise ConfigurationError("no_entity_label MUST NOT be empty")
        if self.tagsets_file is not None:
            self.tagsets_file = Path(self.tagsets_file)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "AnalyzerConfig":
        """
        Build a configuration from ``SPANPIPE_*`` environment variables.

        Recognised variables: SPANPIPE_MAX_WORKERS, SPANPIPE_TIMEOUT,
        SPANPIPE_NO_ENTITY_LABEL, SPANPIPE_TAGSETS. Keyword overrides win over
        the environment.
        """
        env = os.environ if environ is None else environ
        values = {}
        raw_workers = env.get(ENV_PREFIX + "MAX_WORKERS")
        if raw_workers:
            values["max_workers"] = _parse_number(raw_workers, int, "MAX_WORKERS")
        raw_timeout = env.get(ENV_PREFIX + "TIMEOUT")
        if raw_timeout:
            values["timeout"] = _parse_number(raw_timeout, float, "TIMEOUT")
        label = env.get(ENV_PREFIX + "NO_ENTITY_LABEL")
        if label:
            values["no_entity_label"] = label
        tagsets = env.get(ENV_PREFIX + "TAGSETS")
        if tagsets:
            values["tagsets_file"] = Path(tagsets)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def _parse_number(value: str, kind, name: str):
    try:
        return kind(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for {ENV_PREFIX}{name}: '{value}'") from exc
