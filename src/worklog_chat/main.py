"""Entrypoint: run the work-log chat API server."""

import uvicorn

from worklog_chat.api.app import create_app
from worklog_chat.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
