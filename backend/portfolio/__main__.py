"""Run the API with uvicorn: ``python -m portfolio``."""

import uvicorn

from portfolio.core.config import settings
from portfolio.main import create_app


def main() -> None:
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
