"""Run settings loaded from an optional YAML file."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError, SourceUnavailable
from .templates import DEFAULT_TOLERANCE


@dataclass(frozen=True)
class RunSettings:
    """Knobs for plan generation. Every field can be overridden from the CLI."""

    n: int = 10
    seed: Optional[int] = None
    tolerance: float = DEFAULT_TOLERANCE
    log_level: str = "WARNING"

    def override(self, **values: object) -> "RunSettings":
        """Return a copy with every non-``None`` value applied."""

        return replace(self, **{key: value for key, value in values.items() if value is not None})


def load_settings(path: Optional[str | Path] = None) -> RunSettings:
    """
    Read settings of the form::

        generation:
          n: 1000
          seed: 7
        tolerance: 1.0e-9
        logging:
          level: INFO

    Missing keys keep their defaults; ``path=None`` returns the defaults.
    """

    if path is None:
        return RunSettings()
    settings_path = Path(path)
    try:
        text = settings_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceUnavailable(f"cannot read settings {settings_path}: {exc}") from exc
    try:
        cfg = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid settings YAML in {settings_path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"settings in {settings_path} must be a mapping")

    gen = cfg.get("generation") or {}
    log_cfg = cfg.get("logging") or {}
    defaults = RunSettings()
    try:
        return RunSettings(
            n=int(gen.get("n", defaults.n)),
            seed=None if gen.get("seed") is None else int(gen["seed"]),
            tolerance=float(cfg.get("tolerance", defaults.tolerance)),
            log_level=str(log_cfg.get("level", defaults.log_level)).upper(),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value in settings {settings_path}: {exc}") from exc
