"""Entry point for running rift-radio as a module: python -m rift_radio."""

import sys

import uvicorn
from pydantic import ValidationError

from rift_radio.settings import get_settings


def main() -> None:
    """Start the FastAPI server."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e.errors()[0]['msg']}", file=sys.stderr)
        sys.exit(1)
    uvicorn.run(
        "rift_radio.api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
