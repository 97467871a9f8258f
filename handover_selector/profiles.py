"""
Handover Selector - Profile Store

Loads named handover profiles from YAML or JSON and resolves names,
falling back to the default profile for unknown names.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from .models import ProfileConfig

logger = logging.getLogger(__name__)


# Built-in profiles, used when no profiles file is configured
DEFAULT_PROFILES = {
    "web": ProfileConfig(
        w1=0.2, w2=0.2, w3=0.4, w4=0.2,
        theta=0.15,
        hysteresis_up=0.03,
        hysteresis_down=0.02,
        min_wifi_rssi=-75,
        max_wifi_jitter=60,
        max_wifi_loss=6
    ),
    "video": ProfileConfig(
        w1=0.2, w2=0.15, w3=0.45, w4=0.2,
        theta=0.12,
        hysteresis_up=0.04,
        hysteresis_down=0.02,
        min_wifi_rssi=-72,
        max_wifi_jitter=40,
        max_wifi_loss=3
    ),
    "gaming": ProfileConfig(
        w1=0.25, w2=0.45, w3=0.1, w4=0.2,
        theta=0.1,
        hysteresis_up=0.05,
        hysteresis_down=0.03,
        min_wifi_rssi=-70,
        max_wifi_jitter=25,
        max_wifi_loss=2
    ),
    "urllc": ProfileConfig(
        w1=0.3, w2=0.5, w3=0.0, w4=0.2,
        theta=0.08,
        hysteresis_up=0.06,
        hysteresis_down=0.02,
        min_wifi_rssi=-67,
        max_wifi_jitter=15,
        max_wifi_loss=1
    ),
}


class ProfileLoadError(ValueError):
    """Raised when a profiles file cannot be parsed into profiles."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class ProfileStore:
    """
    Named profile registry.

    Resolution never fails: unknown names fall back to the default profile,
    so the decision engine only ever sees a complete ProfileConfig.
    """

    def __init__(
        self,
        profiles: Optional[Dict[str, ProfileConfig]] = None,
        default: str = "web"
    ):
        self._profiles = dict(profiles if profiles is not None else DEFAULT_PROFILES)
        if default not in self._profiles:
            raise ValueError(f"Default profile '{default}' is not defined")
        self.default = default

    @classmethod
    def load(
        cls,
        source: Union[str, Path, dict],
        default: str = "web"
    ) -> "ProfileStore":
        """
        Load profiles from a YAML/JSON file, string, or dict.

        Accepts both `name: {handover_params: {...}}` and `name: {...}`.
        """
        label = str(source) if isinstance(source, Path) else "<inline>"

        try:
            if isinstance(source, dict):
                data = source
            elif isinstance(source, Path) or (isinstance(source, str) and Path(source).exists()):
                path = Path(source)
                label = str(path)
                with open(path, "r") as f:
                    data = yaml.safe_load(f)
            else:
                data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise ProfileLoadError(label, str(e)) from e

        if not isinstance(data, dict) or not data:
            raise ProfileLoadError(label, "expected a mapping of profile names")

        profiles = {}
        for name, body in data.items():
            params = body or {}
            if isinstance(params, dict) and "handover_params" in params:
                params = params["handover_params"] or {}
            if not isinstance(params, dict):
                raise ProfileLoadError(label, f"profile '{name}' is not a mapping")
            try:
                profiles[str(name)] = ProfileConfig.model_validate(params)
            except ValidationError as e:
                raise ProfileLoadError(label, f"profile '{name}': {e}") from e

        if default not in profiles:
            logger.warning(f"Default profile '{default}' missing from {label}, using built-in")
            profiles[default] = DEFAULT_PROFILES.get(default, ProfileConfig())

        logger.info(f"Loaded {len(profiles)} profiles from {label}")
        return cls(profiles, default=default)

    def names(self) -> List[str]:
        return list(self._profiles.keys())

    def get(self, name: str) -> Optional[ProfileConfig]:
        """Exact lookup, no fallback."""
        return self._profiles.get(name)

    def resolve_name(self, name: Optional[str]) -> str:
        """Return `name` if known, otherwise the default profile name."""
        if name in self._profiles:
            return name
        if name is not None:
            logger.warning(f"Unknown profile '{name}', falling back to '{self.default}'")
        return self.default

    def resolve(self, name: Optional[str]) -> ProfileConfig:
        return self._profiles[self.resolve_name(name)]

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: cfg.model_dump() for name, cfg in self._profiles.items()}


def load_store(path: str = "", default: str = "web") -> ProfileStore:
    """Build the store from a file when one is configured, else built-ins."""
    if path:
        return ProfileStore.load(Path(path), default=default)
    return ProfileStore(default=default)
