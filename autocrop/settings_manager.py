from __future__ import annotations

import json
import os
from dataclasses import replace
from typing import Any

from autocrop.config import DEFAULT_MARGIN, DEFAULT_THRESHOLD, MAX_ALPHA, REC709_WEIGHTS, AlphaWeighting, AutocropConfig
from autocrop.logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "threshold": DEFAULT_THRESHOLD,
        "margin": DEFAULT_MARGIN,
        "luminance_weights": list(REC709_WEIGHTS),
        "alpha_weighting": AlphaWeighting.ADDITIVE.value,
        "max_alpha": MAX_ALPHA,
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
                    _logger.warning("settings file is not a JSON object: %s", self.settings_path)
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except OSError as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def threshold(self) -> float:
        val = self.get("threshold")
        try:
            return float(val)
        except (TypeError, ValueError):
            _logger.warning("saved threshold invalid: %s", val)
            return DEFAULT_THRESHOLD

    def to_config(self) -> AutocropConfig:
        """Build an AutocropConfig, skipping (and logging) invalid stored values."""
        config = AutocropConfig()
        for key in ("margin", "luminance_weights", "alpha_weighting", "max_alpha"):
            if not self.has(key):
                continue
            try:
                config = replace(config, **{key: self._settings[key]})
            except (TypeError, ValueError) as e:
                _logger.warning("saved %s invalid (%r): %s", key, self._settings[key], e)
        return config
