"""Conversions between the canonical settings shape and the mobile shape.

The mobile app names the per-minigame toggles ``minigameN_enabled`` where
the canonical shape uses ``mgN_enabled``. Every field is listed explicitly
in both directions, so a new setting has to be added here on purpose.
"""

import math
from collections.abc import Mapping
from typing import Any

from app.utils.setting_values import is_numeric_value, parse_setting_value

# Fallbacks applied by to_mobile_shape when a score field is missing or not a number
MOBILE_SCORE_DEFAULTS: Mapping[str, int] = {
    "mg1_score_hit": 50,
    "mg2_score_max": 1000,
    "mg3_score_round": 200,
    "mg4_score_max": 100,
    "mg5_score_hit": 50,
}


def _score(settings: Mapping[str, Any], key: str) -> int:
    """Whole-number score for the mobile app, truncating fractions."""
    value = settings.get(key)
    if isinstance(value, str):
        value = parse_setting_value(value)
    if is_numeric_value(value) and math.isfinite(value):
        return int(value)
    return MOBILE_SCORE_DEFAULTS[key]


def to_mobile_shape(settings: Mapping[str, Any]) -> dict[str, Any]:
    """Build the mobile payload from a canonical snapshot.

    Fields absent from ``settings`` are sent as ``None``, except the five
    score fields, which fall back to ``MOBILE_SCORE_DEFAULTS``.
    """
    return {
        "minimum_passing_score": settings.get("minimum_passing_score"),
        "hard_mode_threshold": settings.get("hard_mode_threshold"),
        "minigame_enabled": settings.get("minigame_enabled"),
        # Minigame 1
        "minigame1_enabled": settings.get("mg1_enabled"),
        "mg1_speed_normal": settings.get("mg1_speed_normal"),
        "mg1_speed_hard": settings.get("mg1_speed_hard"),
        # Minigame 2
        "minigame2_enabled": settings.get("mg2_enabled"),
        "mg2_rounds": settings.get("mg2_rounds"),
        "mg2_speed_normal": settings.get("mg2_speed_normal"),
        "mg2_speed_hard": settings.get("mg2_speed_hard"),
        # Minigame 3
        "minigame3_enabled": settings.get("mg3_enabled"),
        "mg3_rounds": settings.get("mg3_rounds"),
        "mg3_time_normal": settings.get("mg3_time_normal"),
        "mg3_time_hard": settings.get("mg3_time_hard"),
        # Minigame 4
        "minigame4_enabled": settings.get("mg4_enabled"),
        "mg4_time_normal": settings.get("mg4_time_normal"),
        "mg4_time_hard": settings.get("mg4_time_hard"),
        # Minigame 5
        "minigame5_enabled": settings.get("mg5_enabled"),
        "mg5_time_normal": settings.get("mg5_time_normal"),
        "mg5_time_hard": settings.get("mg5_time_hard"),
        # Scores
        "mg1_score_hit": _score(settings, "mg1_score_hit"),
        "mg2_score_max": _score(settings, "mg2_score_max"),
        "mg3_score_round": _score(settings, "mg3_score_round"),
        "mg4_score_max": _score(settings, "mg4_score_max"),
        "mg5_score_hit": _score(settings, "mg5_score_hit"),
    }


def _toggle(payload: Mapping[str, Any], n: int) -> Any:
    mobile_key = f"minigame{n}_enabled"
    if payload.get(mobile_key) is not None:
        return payload[mobile_key]
    return payload.get(f"mg{n}_enabled")


def from_mobile_shape(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a mobile (or canonical) payload into canonical changes.

    Either toggle naming is accepted; ``minigameN_enabled`` wins when both
    are present. Unknown keys and fields that are absent or ``None`` are
    dropped, so the result only contains values the caller actually sent.
    """
    canonical = {
        "minimum_passing_score": payload.get("minimum_passing_score"),
        "hard_mode_threshold": payload.get("hard_mode_threshold"),
        "minigame_enabled": payload.get("minigame_enabled"),
        # Minigame 1
        "mg1_enabled": _toggle(payload, 1),
        "mg1_speed_normal": payload.get("mg1_speed_normal"),
        "mg1_speed_hard": payload.get("mg1_speed_hard"),
        # Minigame 2
        "mg2_enabled": _toggle(payload, 2),
        "mg2_rounds": payload.get("mg2_rounds"),
        "mg2_speed_normal": payload.get("mg2_speed_normal"),
        "mg2_speed_hard": payload.get("mg2_speed_hard"),
        # Minigame 3
        "mg3_enabled": _toggle(payload, 3),
        "mg3_rounds": payload.get("mg3_rounds"),
        "mg3_time_normal": payload.get("mg3_time_normal"),
        "mg3_time_hard": payload.get("mg3_time_hard"),
        # Minigame 4
        "mg4_enabled": _toggle(payload, 4),
        "mg4_time_normal": payload.get("mg4_time_normal"),
        "mg4_time_hard": payload.get("mg4_time_hard"),
        # Minigame 5
        "mg5_enabled": _toggle(payload, 5),
        "mg5_time_normal": payload.get("mg5_time_normal"),
        "mg5_time_hard": payload.get("mg5_time_hard"),
        # Scores
        "mg1_score_hit": payload.get("mg1_score_hit"),
        "mg2_score_max": payload.get("mg2_score_max"),
        "mg3_score_round": payload.get("mg3_score_round"),
        "mg4_score_max": payload.get("mg4_score_max"),
        "mg5_score_hit": payload.get("mg5_score_hit"),
    }
    return {key: value for key, value in canonical.items() if value is not None}
