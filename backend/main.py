from __future__ import annotations

import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

from userapi import create_app  # noqa: E402
from userapi.config import BaseConfig  # noqa: E402
from userapi.errors import PersistenceError  # noqa: E402


def main() -> None:
    config = BaseConfig()
    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL)

    try:
        app = create_app(config)
    except PersistenceError as exc:
        logger.opt(exception=exc).critical("Could not connect to the user store")
        sys.exit(1)

    logger.info("Server running on http://localhost:{}", config.PORT)
    app.run(host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
