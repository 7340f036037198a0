import uvicorn

from backoffice.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("backoffice.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
