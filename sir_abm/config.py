"""
Model parameters for the spatial SIR ABM.

The configuration is immutable; use ``SIRConfig.replace`` or ``load_config``
to derive variants. Space is the periodic unit square, so lengths
(``interaction_radius``, ``speed``) are fractions of the side.
"""
import copy
from dataclasses import dataclass, asdict, fields, replace as _dc_replace
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidConfig

PAIRING_METHODS = ("nearest", "all")


@dataclass(frozen=True)
class SIRConfig:
    # Disease
    infection_period: int = 720         # ticks until recover-or-die
    detection_time: int = 14            # stored only, no transition uses it
    reinfection_probability: float = 0.05
    death_rate: float = 0.044
    beta_min: float = 0.4
    beta_max: float = 0.8
    epidemic: bool = True               # False -> movement + collisions only

    # Population
    n_agents: int = 250
    initial_infected: int = 5
    isolated: float = 0.0               # fraction made immobile (infinite mass)
    mass: float = 1.0

    # Space / time
    interaction_radius: float = 0.012
    interaction_method: str = "nearest"
    dt: float = 1.0
    speed: float = 0.002

    seed: int = 42

    def problems(self):
        out = []
        for name in ("reinfection_probability", "death_rate", "isolated", "beta_min", "beta_max"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                out.append(f"{name}={v} must lie in [0, 1]")
        if self.beta_min <= 0.0:
            out.append(f"beta_min={self.beta_min} must be > 0")
        if self.beta_min > self.beta_max:
            out.append(f"beta_min={self.beta_min} exceeds beta_max={self.beta_max}")
        if self.n_agents < 1:
            out.append(f"n_agents={self.n_agents} must be positive")
        if self.initial_infected < 0:
            out.append(f"initial_infected={self.initial_infected} must be >= 0")
        if self.n_agents < self.initial_infected:
            out.append(f"n_agents={self.n_agents} is smaller than initial_infected={self.initial_infected}")
        if self.infection_period < 0:
            out.append(f"infection_period={self.infection_period} must be >= 0")
        if self.detection_time < 0:
            out.append(f"detection_time={self.detection_time} must be >= 0")
        if self.interaction_radius <= 0.0:
            out.append(f"interaction_radius={self.interaction_radius} must be > 0")
        if self.dt <= 0.0:
            out.append(f"dt={self.dt} must be > 0")
        if self.speed < 0.0:
            out.append(f"speed={self.speed} must be >= 0")
        if not self.mass > 0.0:
            out.append(f"mass={self.mass} must be > 0")
        if self.interaction_method not in PAIRING_METHODS:
            out.append(f"interaction_method={self.interaction_method!r} not in {PAIRING_METHODS}")
        return out

    def validate(self) -> "SIRConfig":
        """Raise InvalidConfig listing every bad field; return self otherwise."""
        problems = self.problems()
        if problems:
            raise InvalidConfig(problems)
        return self

    def replace(self, **overrides) -> "SIRConfig":
        return _dc_replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SIRConfig":
        """Create config from a (possibly partial) dict; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


DEFAULTS = SIRConfig()


def as_config(config=None, **overrides) -> SIRConfig:
    """Coerce None / dict / SIRConfig plus keyword overrides into an SIRConfig."""
    if config is None:
        cfg = DEFAULTS
    elif isinstance(config, SIRConfig):
        cfg = config
    elif isinstance(config, dict):
        cfg = SIRConfig.from_dict(config)
    else:
        raise TypeError(f"expected SIRConfig or dict, got {type(config).__name__}")
    if overrides:
        cfg = cfg.replace(**overrides)
    return cfg


def load_config(yaml_path: Optional[str] = None, **overrides) -> SIRConfig:
    """Load parameters from YAML if provided, merged over DEFAULTS."""
    params = copy.deepcopy(DEFAULTS.to_dict())
    if yaml_path is not None:
        with open(yaml_path, "r") as f:
            user = yaml.safe_load(f) or {}
        if not isinstance(user, dict):
            raise InvalidConfig(f"{yaml_path} does not contain a mapping")
        params.update(user)
    params.update(overrides)
    return SIRConfig.from_dict(params).validate()


def save_config(config: SIRConfig, path: str) -> str:
    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    return path
