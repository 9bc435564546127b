"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from photo_editor.config import Settings


def main() -> None:
    """Run the API server on the configured port."""
    settings = Settings()
    uvicorn.run(
        "photo_editor.api.asgi:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        reload=settings.environment == "local",
    )


if __name__ == "__main__":
    main()
