"""Configuration helpers for the wardrobe gap advisor."""

from dataclasses import dataclass, field
from pathlib import Path
import os
from typing import List, Optional

from models.taxonomy import ALL_SEASON, SEASONS, normalize_seasons

DEFAULT_COVERAGE_THRESHOLD = 60.0
DEFAULT_OUTFIT_TARGET_IDEAL = 10
DEFAULT_SEASONS = list(SEASONS)


def _parse_float(value: object, default: float) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _parse_int(value: object, default: int) -> int:
    try:
        return int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default


def _parse_list(value: object, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, (list, tuple)):
        parts = [str(part) for part in value]
    else:
        parts = str(value).strip("[]").split(",")
    cleaned = [part.strip().strip("\"'").lower() for part in parts if part.strip()]
    return cleaned or list(default)


def _parse_seasons(value: object) -> List[str]:
    """Season list with aliases resolved; ``all-season`` means every season."""

    seasons = normalize_seasons(_parse_list(value, DEFAULT_SEASONS))
    if ALL_SEASON in seasons:
        return list(SEASONS)
    return seasons or list(DEFAULT_SEASONS)


@dataclass
class AdvisorConfig:
    """Tunable values for gap analysis.

    The thresholds mirror the product defaults: a scenario is a gap below 60%
    coverage, and ten complete outfits count as full coverage for a
    scenario/season pair.
    """

    coverage_threshold: float = DEFAULT_COVERAGE_THRESHOLD
    outfit_target_ideal: int = DEFAULT_OUTFIT_TARGET_IDEAL
    default_seasons: List[str] = field(default_factory=lambda: list(DEFAULT_SEASONS))
    log_level: str = "INFO"
    environment: Optional[str] = None

    def __post_init__(self) -> None:
        self.default_seasons = _parse_seasons(self.default_seasons)

    @classmethod
    def from_env(cls) -> "AdvisorConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default. Environment variables always win over file values.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("ADVISOR_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path: Optional[Path] = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), yaml_config.get(key, default))

        return cls(
            coverage_threshold=_parse_float(get_value("coverage_threshold"), DEFAULT_COVERAGE_THRESHOLD),
            outfit_target_ideal=max(1, _parse_int(get_value("outfit_target_ideal"), DEFAULT_OUTFIT_TARGET_IDEAL)),
            default_seasons=_parse_seasons(get_value("default_seasons")),
            log_level=str(get_value("log_level", "INFO") or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` file without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


__all__ = ["AdvisorConfig", "DEFAULT_COVERAGE_THRESHOLD", "DEFAULT_OUTFIT_TARGET_IDEAL", "DEFAULT_SEASONS"]
