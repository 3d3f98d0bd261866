"""Settings update orchestration: persist, invalidate, refetch, broadcast."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.schemas.settings import SettingsUpdateSchema
from app.services.activity_service import ActivityService
from app.services.settings_broadcaster import Audience, SettingsBroadcaster
from app.services.settings_cache import SettingsCache, Snapshot
from app.services.settings_service import SettingsService
from app.utils.setting_values import SettingValue, serialize_setting_value
from app.utils.settings_format import from_mobile_shape, to_mobile_shape

logger = logging.getLogger(__name__)

SETTINGS_UPDATE_EVENT = "settings_update"


class SettingsUpdateService:
    """Request-scoped service reading and writing settings for both audiences.

    Reads go through the shared cache. A write persists each key as its own
    committed unit, then invalidates the cache, refetches the snapshot and
    pushes it to web streams in canonical shape and to mobile streams in
    mobile shape.
    """

    def __init__(
        self,
        db: Session,
        settings_service: SettingsService,
        settings_cache: SettingsCache,
        broadcaster: SettingsBroadcaster,
        activity_service: ActivityService,
    ) -> None:
        self.db = db
        self.settings_service = settings_service
        self.settings_cache = settings_cache
        self.broadcaster = broadcaster
        self.activity_service = activity_service

    def get_settings(self) -> Snapshot:
        """Current canonical settings snapshot."""
        return self.settings_cache.get(self.settings_service.get_all)

    def get_mobile_settings(self) -> dict[str, Any]:
        """Current settings in mobile shape."""
        return to_mobile_shape(self.get_settings())

    def update_settings(
        self,
        changes: Mapping[str, Any],
        actor_id: int | None = None,
    ) -> dict[str, SettingValue]:
        """Apply settings changes and notify every open stream.

        Keys are committed one by one. If a key fails, the keys before it
        stay persisted, the error propagates and the cache is left as it
        was; nothing is broadcast.

        Args:
            changes: Canonical keys to new values; absent keys are untouched
            actor_id: ID of the admin making the change, for the activity log

        Returns:
            The canonical snapshot read back after the update

        Raises:
            ValidationException: If a value does not fit its setting
            SQLAlchemyError: If the database rejects a write
        """
        previous = self.settings_service.get_raw()

        for key, value in changes.items():
            try:
                self.settings_service.set(key, value)
                self.db.commit()
            except Exception:
                self.db.rollback()
                logger.warning("Settings update stopped at key %s", key)
                raise

            self._record_change(key, previous.get(key), value, actor_id)

        self.settings_cache.invalidate()
        snapshot = self.get_settings()

        self.broadcaster.broadcast(
            Audience.WEB, {"type": SETTINGS_UPDATE_EVENT, "data": dict(snapshot)}
        )
        self.broadcaster.broadcast(
            Audience.MOBILE,
            {"type": SETTINGS_UPDATE_EVENT, "data": to_mobile_shape(snapshot)},
        )

        logger.info("Updated %d setting(s): %s", len(changes), ", ".join(changes))
        return dict(snapshot)

    def update_mobile_settings(
        self,
        payload: Mapping[str, Any],
        actor_id: int | None = None,
    ) -> dict[str, SettingValue]:
        """Apply changes sent in mobile (or canonical) naming.

        Unknown keys are dropped and known ones are held to the admin
        bounds before anything is persisted.

        Raises:
            pydantic.ValidationError: A value is the wrong type or out of range
        """
        changes = SettingsUpdateSchema.model_validate(from_mobile_shape(payload)).changes()
        return self.update_settings(changes, actor_id=actor_id)

    def _record_change(
        self,
        key: str,
        previous: str | None,
        value: Any,
        actor_id: int | None,
    ) -> None:
        new_text = serialize_setting_value(value)
        if previous == new_text:
            return

        self.activity_service.log(
            "setting_updated",
            f'Setting "{key}" changed from "{previous or "empty"}" to "{new_text}"',
            actor_id,
        )
        self.db.commit()
