"""Development server entry point."""

import logging
import os

from waitress import serve

from app import create_app
from app.config import Settings
from app.consts import DEFAULT_BACKEND_PORT


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = Settings.load()
    app = create_app(settings)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", str(DEFAULT_BACKEND_PORT)))

    if settings.debug:
        app.logger.info("Running in debug mode with Flask development server")
        app.run(host=host, port=port, debug=True, threaded=True)
    else:
        app.logger.info(
            "Running in production mode with Waitress (%d threads)", settings.server_threads
        )
        serve(app, host=host, port=port, threads=settings.server_threads)


if __name__ == "__main__":
    main()
