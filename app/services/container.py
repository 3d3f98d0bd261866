"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.services.activity_service import ActivityService
from app.services.auth_service import AuthService
from app.services.csv_import_service import CsvImportService
from app.services.dashboard_service import DashboardService
from app.services.history_service import HistoryService
from app.services.question_service import QuestionService
from app.services.settings_broadcaster import SettingsBroadcaster
from app.services.settings_cache import SettingsCache
from app.services.settings_service import SettingsService
from app.services.settings_update_service import SettingsUpdateService
from app.services.test_result_service import TestResultService
from app.services.user_service import UserService


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration providers
    config = providers.Dependency(instance_of=Settings)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # Auth service - Singleton, stateless apart from configuration
    auth_service = providers.Singleton(AuthService, config=config)

    # Settings cache - Singleton so every request shares one snapshot
    settings_cache = providers.Singleton(
        SettingsCache,
        ttl_seconds=config.provided.settings_cache_ttl_seconds,
    )

    # Settings broadcaster - Singleton registry of open SSE streams
    settings_broadcaster = providers.Singleton(
        SettingsBroadcaster,
        queue_size=config.provided.sse_queue_size,
        keepalive_seconds=config.provided.sse_keepalive_seconds,
    )

    # ActivityService - Factory creates new instance per request with database session
    activity_service = providers.Factory(
        ActivityService,
        db=db_session,
    )

    # SettingsService - Factory creates new instance per request with database session
    settings_service = providers.Factory(
        SettingsService,
        db=db_session,
    )

    # SettingsUpdateService - Factory tying the store to the shared cache and broadcaster
    settings_update_service = providers.Factory(
        SettingsUpdateService,
        db=db_session,
        settings_service=settings_service,
        settings_cache=settings_cache,
        broadcaster=settings_broadcaster,
        activity_service=activity_service,
    )

    # UserService - Factory creates new instance per request with database session
    user_service = providers.Factory(
        UserService,
        db=db_session,
        auth_service=auth_service,
        activity_service=activity_service,
        page_size=config.provided.page_size,
    )

    # QuestionService - Factory creates new instance per request with database session
    question_service = providers.Factory(
        QuestionService,
        db=db_session,
        activity_service=activity_service,
    )

    # TestResultService - Factory creates new instance per request with database session
    test_result_service = providers.Factory(
        TestResultService,
        db=db_session,
    )

    # HistoryService - Factory creates new instance per request with database session
    history_service = providers.Factory(
        HistoryService,
        db=db_session,
        question_service=question_service,
        page_size=config.provided.page_size,
    )

    # DashboardService - Factory aggregating the per-request services
    dashboard_service = providers.Factory(
        DashboardService,
        user_service=user_service,
        question_service=question_service,
        test_result_service=test_result_service,
        activity_service=activity_service,
    )

    # CsvImportService - Factory creates new instance per request with database session
    csv_import_service = providers.Factory(
        CsvImportService,
        db=db_session,
        user_service=user_service,
        activity_service=activity_service,
    )
