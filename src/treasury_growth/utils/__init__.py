"""Utility subpackage.

Public exports:
- Config dataclasses and validation utilities
- Precondition checks and percentage normalisation
- YAML/JSON/CSV IO convenience helpers
"""

from .config import (
    GROWTH_SHAPES,
    GrowthShape,
    MarketConfig,
    ParticipantConfig,
    PlatformGrowthConfig,
    SimulationConfig,
    TreasuryConfig,
    config_from_dict,
    deep_update,
    validate_config,
    validate_market,
    validate_participant,
    validate_platform,
    validate_treasury,
)
from .io import ensure_dir, load_yaml, save_csv, save_json, save_yaml
from .validation import PreconditionError, percent_to_fraction

__all__ = [
    # config
    "SimulationConfig",
    "MarketConfig",
    "ParticipantConfig",
    "PlatformGrowthConfig",
    "TreasuryConfig",
    # literals
    "GrowthShape",
    "GROWTH_SHAPES",
    # utils
    "deep_update",
    "config_from_dict",
    "validate_config",
    "validate_market",
    "validate_participant",
    "validate_platform",
    "validate_treasury",
    # validation
    "PreconditionError",
    "percent_to_fraction",
    # io
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "save_json",
    "save_csv",
]
