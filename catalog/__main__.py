"""
Run the catalog API with uvicorn: `python -m catalog` or `catalog-api`.

Host, port and log level come from the same Settings the app uses
(HOST, PORT, LOG_LEVEL).
"""

import uvicorn

from catalog.config import settings


def main() -> None:
    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
