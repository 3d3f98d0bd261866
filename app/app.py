"""Flask application class carrying the service container and settings."""

from flask import Flask

from app.config import Settings
from app.services.container import ServiceContainer


class App(Flask):
    """Flask application with access to the DI container and loaded settings."""

    container: ServiceContainer
    settings: Settings
