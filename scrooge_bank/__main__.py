"""Run the API with uvicorn: python -m scrooge_bank"""

import uvicorn

from scrooge_bank.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "scrooge_bank.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
