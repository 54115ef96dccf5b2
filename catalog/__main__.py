# catalog/__main__.py
import uvicorn

from .config import settings


def main():
    uvicorn.run("catalog.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower(),
                access_log=settings.access_log)


if __name__ == "__main__":
    main()
