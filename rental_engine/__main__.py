import uvicorn

from rental_engine.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "rental_engine.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.server_reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
