"""Project constants."""

PROJECT_NAME = "fatigue-admin"
PROJECT_DESCRIPTION = "Flask backend for the fatigue assessment admin panel and mobile app"
API_TITLE = "fatigue-admin API"
API_DESCRIPTION = "REST API for users, questions, minigame settings and test history"
DEFAULT_BACKEND_PORT = 5000

# Results with a total score at or above this count as a success on the dashboard
DASHBOARD_SUCCESS_THRESHOLD = 80
