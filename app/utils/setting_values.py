"""Typed setting values and the defaults every snapshot is merged over.

Settings are persisted as text. They are parsed into ``SettingValue`` once,
when read from the database, and serialized back to text on write.
"""

import re
from collections.abc import Mapping
from types import MappingProxyType

SettingValue = bool | int | float | str

DEFAULT_SETTINGS: Mapping[str, SettingValue] = MappingProxyType(
    {
        "minimum_passing_score": 70,
        "hard_mode_threshold": 85,
        "minigame_enabled": True,
        "mg1_enabled": True,
        "mg1_speed_normal": 2500,
        "mg1_speed_hard": 1000,
        "mg1_score_hit": 50,
        "mg2_enabled": True,
        "mg2_rounds": 3,
        "mg2_speed_normal": 2500,
        "mg2_speed_hard": 1500,
        "mg2_score_max": 1000,
        "mg3_enabled": True,
        "mg3_rounds": 5,
        "mg3_time_normal": 3000,
        "mg3_time_hard": 2000,
        "mg3_score_round": 200,
        "mg4_enabled": True,
        "mg4_time_normal": 3000,
        "mg4_time_hard": 2000,
        "mg4_score_max": 100,
        "mg5_enabled": True,
        "mg5_time_normal": 3000,
        "mg5_time_hard": 2000,
        "mg5_score_hit": 50,
    }
)

BOOLEAN_SETTING_KEYS = frozenset(
    key for key, value in DEFAULT_SETTINGS.items() if isinstance(value, bool)
)
NUMERIC_SETTING_KEYS = frozenset(
    key
    for key, value in DEFAULT_SETTINGS.items()
    if isinstance(value, int | float) and not isinstance(value, bool)
)

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_setting_value(raw: str) -> SettingValue:
    """Type a stored setting value.

    ``"true"``/``"false"`` become booleans, integral text becomes an int,
    other finite numeric text becomes a float and everything else is kept
    as a string.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False

    text = raw.strip()
    if not text:
        return raw

    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)

    try:
        number = float(text)
    except ValueError:
        return raw

    # float() also accepts "nan" and "inf", which are not numbers here
    if number != number or number in (float("inf"), float("-inf")):
        return raw
    return number


def serialize_setting_value(value: SettingValue) -> str:
    """Convert a typed value to its stored text form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_numeric_value(value: object) -> bool:
    """Whether a value is a real number (booleans excluded)."""
    return isinstance(value, int | float) and not isinstance(value, bool)
