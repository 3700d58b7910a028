from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv


def load_env() -> None:
    """
    Load .env into the process environment.
    No-op when no .env file is present.
    """
    # Prefer repo-root .env
    env_path = Path(".env")
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path)
        return

    # Fallback: common pattern ".env/.env"
    alt = Path(".env") / ".env"
    if alt.is_file():
        load_dotenv(dotenv_path=alt)
