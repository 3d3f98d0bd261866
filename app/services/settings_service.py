"""Settings service for the persisted minigame and scoring configuration."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.exceptions import ValidationException
from app.models.setting import AppSetting
from app.utils.setting_values import (
    BOOLEAN_SETTING_KEYS,
    NUMERIC_SETTING_KEYS,
    SettingValue,
    is_numeric_value,
    parse_setting_value,
    serialize_setting_value,
)

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reading and upserting rows of the ``app_settings`` table.

    This is the source of truth behind the settings cache. Values are typed
    on the way out and checked against the known setting kinds on the way in,
    so a numeric setting can never be stored as arbitrary text.
    """

    def __init__(self, db: Session) -> None:
        """Initialize settings service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get_all(self) -> dict[str, SettingValue]:
        """Read every stored setting.

        Returns:
            Mapping of setting key to typed value (stored keys only, no defaults)
        """
        stmt = select(AppSetting)
        return {
            setting.setting_key: parse_setting_value(setting.setting_value)
            for setting in self.db.scalars(stmt)
        }

    def get_raw(self) -> dict[str, str]:
        """Read every stored setting as its stored text."""
        stmt = select(AppSetting)
        return {
            setting.setting_key: setting.setting_value
            for setting in self.db.scalars(stmt)
        }

    def set(self, key: str, value: object) -> None:
        """Insert or overwrite a setting.

        Args:
            key: Setting key
            value: New value; numeric settings accept numbers or numeric
                text, boolean settings accept booleans or "true"/"false"

        Raises:
            ValidationException: If the value does not fit the setting
        """
        serialized = serialize_setting_value(self._coerce(key, value))

        setting = self.db.get(AppSetting, key)
        if setting is None:
            setting = AppSetting(setting_key=key, setting_value=serialized)
            self.db.add(setting)
            logger.debug("Created setting %s", key)
        else:
            setting.setting_value = serialized
            logger.debug("Updated setting %s", key)

        self.db.flush()

    def _coerce(self, key: str, value: object) -> SettingValue:
        if value is None:
            raise ValidationException(f"Setting {key} requires a value")

        if key in NUMERIC_SETTING_KEYS:
            if is_numeric_value(value):
                return value  # type: ignore[return-value]
            if isinstance(value, str):
                parsed = parse_setting_value(value)
                if is_numeric_value(parsed):
                    return parsed
            raise ValidationException(f"Setting {key} must be a number, got {value!r}")

        if key in BOOLEAN_SETTING_KEYS:
            if isinstance(value, bool):
                return value
            if value in ("true", "false"):
                return value == "true"
            raise ValidationException(f"Setting {key} must be true or false, got {value!r}")

        if isinstance(value, bool | int | float | str):
            return value
        raise ValidationException(f"Setting {key} has an unsupported value type")
