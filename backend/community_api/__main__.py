"""Run the API with uvicorn: `python -m community_api`."""

import uvicorn

from community_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "community_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
