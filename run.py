"""Entry point for the Lumina library browser."""

from pathlib import Path

import uvicorn

from lumina.config import load_config


def main() -> None:
    """Prepare the storage directory and serve the app."""
    config = load_config()

    Path(config.storage.path).parent.mkdir(parents=True, exist_ok=True)

    uvicorn.run(
        "lumina.main:app",
        host="127.0.0.1",
        port=8000,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
