"""Tests for SettingsService."""

import pytest
from flask import Flask

from app.exceptions import ValidationException
from app.services.container import ServiceContainer


class TestSettingsServiceReadWrite:
    """Tests for storing and reading settings."""

    def test_get_all_empty_store(self, app: Flask, container: ServiceContainer) -> None:
        """Test that a fresh database has no stored settings."""
        with app.app_context():
            service = container.settings_service()

            assert service.get_all() == {}

    def test_set_and_get_typed_values(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            service = container.settings_service()
            service.set("minimum_passing_score", 65)
            service.set("mg1_enabled", False)
            service.set("mg2_speed_hard", 1250.5)

            assert service.get_all() == {
                "minimum_passing_score": 65,
                "mg1_enabled": False,
                "mg2_speed_hard": 1250.5,
            }
            assert service.get_raw() == {
                "minimum_passing_score": "65",
                "mg1_enabled": "false",
                "mg2_speed_hard": "1250.5",
            }

    def test_set_overwrites_existing(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            service = container.settings_service()
            service.set("mg3_rounds", 5)
            service.set("mg3_rounds", 8)

            assert service.get_all() == {"mg3_rounds": 8}

    def test_numeric_text_is_accepted(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            service = container.settings_service()
            service.set("mg4_time_normal", "3500")
            service.set("mg5_enabled", "false")

            assert service.get_all() == {"mg4_time_normal": 3500, "mg5_enabled": False}


class TestSettingsServiceValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("value", ["fast", True, None, [1]])
    def test_numeric_setting_rejects_non_numbers(
        self, app: Flask, container: ServiceContainer, value: object
    ) -> None:
        with app.app_context():
            service = container.settings_service()

            with pytest.raises(ValidationException):
                service.set("mg1_speed_normal", value)

            assert "mg1_speed_normal" not in service.get_all()

    @pytest.mark.parametrize("value", [1, "yes", "True"])
    def test_boolean_setting_rejects_non_booleans(
        self, app: Flask, container: ServiceContainer, value: object
    ) -> None:
        with app.app_context():
            service = container.settings_service()

            with pytest.raises(ValidationException) as exc_info:
                service.set("mg2_enabled", value)

            assert "true or false" in str(exc_info.value)
