"""Engine configuration loader.

Loads and provides access to the display and classification parameters in
config.yaml. Everything tunable about colouring, IV sample detection and
variable ordering lives there so the engine code stays free of magic numbers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import yaml

__all__ = ["EngineConfig", "config"]


class EngineConfig:
    """Engine configuration singleton."""

    _instance: EngineConfig | None = None
    _config: dict[str, Any] | None = None

    def __new__(cls) -> EngineConfig:
        """Singleton pattern to ensure config is loaded once."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Load configuration from YAML file."""
        if self._config is None:
            config_path = Path(__file__).parent / "config.yaml"
            with open(config_path, encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get configuration value by nested keys.

        Args:
            *keys: Nested keys to traverse (e.g., "iv", "samples", "whole")
            default: Default value if key path not found

        Returns:
            Configuration value or default

        Examples:
            >>> config = EngineConfig()
            >>> config.get("iv", "samples", "whole")
            63413
            >>> config.get("significance", "marker")
            '*'

        """
        value = self._config
        for key in keys:
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    @property
    def non_negative_rgb(self) -> tuple[int, int, int]:
        """RGB triple for coefficients >= 0."""
        r, g, b = cast(list[int], self.get("colors", "non_negative", default=[255, 0, 0]))
        return (r, g, b)

    @property
    def negative_rgb(self) -> tuple[int, int, int]:
        """RGB triple for coefficients < 0."""
        r, g, b = cast(list[int], self.get("colors", "negative", default=[0, 128, 0]))
        return (r, g, b)

    @property
    def significance_marker(self) -> str:
        """Character marking a coefficient as significant."""
        return cast(str, self.get("significance", "marker", default="*"))

    @property
    def significant_intensity(self) -> float:
        """Opacity for significant coefficients."""
        return cast(float, self.get("significance", "intensity", "significant", default=1.0))

    @property
    def insignificant_intensity(self) -> float:
        """Opacity for coefficients without a significance marker."""
        return cast(float, self.get("significance", "intensity", "insignificant", default=0.6))

    @property
    def iv_sample_observations(self) -> dict[str, int]:
        """Observation count identifying each IV sample (sample key: N)."""
        return cast(
            dict[str, int],
            self.get(
                "iv",
                "samples",
                default={"whole": 63413, "lottery_scp": 17553, "lottery_only": 6289},
            ),
        )

    @property
    def full_sample_threshold(self) -> int:
        """Smallest N treated as the full sample by the coarse sample label."""
        return cast(int, self.get("iv", "full_sample_threshold", default=60000))

    @property
    def baseline_variable_order(self) -> list[str]:
        """Normalized presentation order for baseline variables."""
        return cast(list[str], self.get("variables", "baseline_order", default=[]))

    @property
    def iv_variable_order(self) -> list[str]:
        """Normalized instrument-specific variables shown ahead of the baseline order."""
        return cast(list[str], self.get("variables", "iv_order", default=[]))


# Global singleton instance
config = EngineConfig()

# Convenient module-level constants
SIGNIFICANCE_MARKER = config.significance_marker
SIGNIFICANT_INTENSITY = config.significant_intensity
INSIGNIFICANT_INTENSITY = config.insignificant_intensity
IV_SAMPLE_OBSERVATIONS = config.iv_sample_observations
FULL_SAMPLE_THRESHOLD = config.full_sample_threshold
