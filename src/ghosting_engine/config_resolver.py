"""Workout → pattern → entry config inheritance."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ghosting_engine.models.config import EffectiveConfig


def merge_configs(
    base: Mapping[str, Any] | None, override: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Deep-merge *override* onto *base*.

    Nested mappings merge field by field; every other value (scalars and
    lists alike) replaces the base value. ``None`` in *override* never
    replaces anything. Neither input is mutated.
    """
    merged: dict[str, Any] = dict(base or {})
    for key, value in (override or {}).items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_configs(current, value)
        elif isinstance(value, Mapping):
            merged[key] = merge_configs({}, value)
        else:
            merged[key] = value
    return merged


def resolve_config(
    workout_config: Mapping[str, Any] | None,
    pattern_config: Mapping[str, Any] | None,
    entry_config: Mapping[str, Any] | None,
) -> EffectiveConfig:
    """Merge the three levels in override order and coerce to EffectiveConfig."""
    merged = merge_configs(merge_configs(workout_config, pattern_config), entry_config)
    return EffectiveConfig.from_mapping(merged)
