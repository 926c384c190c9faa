from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml


class Config:
    _instance = None
    _data = None

    def __new__(cls):
        has_instance = cls._instance is not None
        cls._instance = cls._instance if has_instance else super().__new__(cls)
        return cls._instance

    def __init__(self):
        already_loaded = self._data is not None
        self._data = self._data if already_loaded else self._load()

    def __getitem__(self, key: str):
        return self._data.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"Config(keys={list(self._data.keys())})"

    def _load(self) -> dict:
        config_path = Path(__file__).parent / "config.yaml"

        load_fn = lambda p: yaml.safe_load(p.read_text()) or {}
        default_fn = lambda: self._default_config()

        return load_fn(config_path) if config_path.exists() else default_fn()

    def _default_config(self) -> dict:
        return {
            'numerical': {
                'epsilon': 1e-5, 'coordinate_tolerance': 1e-6,
                'scale_aware_epsilon': False
            },
            'walk': {'iteration_cap_factor': 2, 'validate_triangle': False},
            'output': {'winding': None},
        }

    def get_nested(self, *keys, default: Any = None):
        result = self._data

        for key in keys:
            try:
                result = result[key]
            except (KeyError, TypeError):
                return default

        return result

    def reload(self, config_path: Path | str | None = None) -> Config:
        """Re-read settings, from ``config_path`` if given."""
        if config_path is None:
            self._data = self._load()
            return self

        with open(config_path, "r") as f:
            self._data = yaml.safe_load(f) or {}
        return self


CFG = Config()
