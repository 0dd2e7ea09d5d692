"""Run the URL service with uvicorn."""

import uvicorn

from url_service.core.config import settings


def main() -> None:
    uvicorn.run(
        "url_service.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=int(settings.SHUTDOWN_TIMEOUT_SECONDS),
    )


if __name__ == "__main__":
    main()
