"""
Configuration management for the circle transform
"""

import copy
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

from circletransform.errors import InvalidConfigError

DEFAULT_CONFIG = {
    "transform": {
        "noise": None,
        "deinterlace": None,
        "threshold_factor": 2.0,
        "pixel_offset": 1
    },
    "voting": {
        "chunk_size": 1048576,
        "n_jobs": 1
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


@dataclass
class TransformConfig:
    """Recognised transform options, validated once at the entry point."""

    noise: Optional[float] = None
    deinterlace: Optional[int] = None
    threshold_factor: float = 2.0
    pixel_offset: int = 1
    chunk_size: int = 1048576
    n_jobs: int = 1

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "TransformConfig":
        """
        Build a config from a nested dictionary shaped like DEFAULT_CONFIG.

        Missing sections and keys fall back to the defaults. Unknown keys in the
        ``transform`` and ``voting`` sections are rejected.
        """
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in (config or {}).items():
            if section not in merged:
                raise InvalidConfigError(f"Unknown config section: {section!r}")
            if not isinstance(values, dict):
                raise InvalidConfigError(f"Config section {section!r} must be a mapping")
            if section != "logging":
                unknown = set(values) - set(merged[section])
                if unknown:
                    raise InvalidConfigError(
                        f"Unknown keys in section {section!r}: {sorted(unknown)}"
                    )
            merged[section].update(values)

        return cls(**merged["transform"], **merged["voting"]).validate()

    def replace(self, **overrides) -> "TransformConfig":
        """Return a validated copy with the non-None overrides applied."""
        values = dict(self.__dict__)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TransformConfig(**values).validate()

    def validate(self) -> "TransformConfig":
        """Check every option, raising InvalidConfigError on the first bad one."""
        if self.noise is not None:
            if (isinstance(self.noise, (bool, np.bool_))
                    or not isinstance(self.noise, numbers.Real)):
                raise InvalidConfigError(f"noise must be a real number, got {self.noise!r}")
            if not np.isfinite(self.noise) or self.noise < 0:
                raise InvalidConfigError(f"noise must be finite and >= 0, got {self.noise!r}")

        if self.deinterlace is not None and not _is_int(self.deinterlace):
            raise InvalidConfigError(
                f"deinterlace must be an integer, got {self.deinterlace!r}"
            )

        if (not isinstance(self.threshold_factor, numbers.Real)
                or not self.threshold_factor > 0):
            raise InvalidConfigError("threshold_factor must be a positive number")
        if not _is_int(self.pixel_offset):
            raise InvalidConfigError("pixel_offset must be an integer")
        if not _is_int(self.chunk_size) or self.chunk_size < 1:
            raise InvalidConfigError("chunk_size must be a positive integer")
        if not _is_int(self.n_jobs) or self.n_jobs < 1:
            raise InvalidConfigError("n_jobs must be a positive integer")

        return self


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file and merge it over DEFAULT_CONFIG."""
    try:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(loaded, dict):
        raise InvalidConfigError(f"Config file {path} must contain a mapping")

    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in loaded.items():
        if isinstance(values, dict) and section in merged:
            merged[section].update(values)
        else:
            merged[section] = values
    return merged
