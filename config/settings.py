from pathlib import Path
import logging
import os
from dotenv import load_dotenv

# Point to the .env file in the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_PATH = PROJECT_ROOT / ".env"
load_dotenv(dotenv_path=ENV_PATH)

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

TEXT_MODEL = os.getenv("ADCRAFT_TEXT_MODEL", "gpt-4o-mini")
IMAGE_MODEL = os.getenv("ADCRAFT_IMAGE_MODEL", "gpt-image-1")
IMAGE_SIZE = os.getenv("ADCRAFT_IMAGE_SIZE", "1024x1024")

# Single JSON record holding the wizard state
STATE_PATH = Path(
    os.getenv("ADCRAFT_STATE_PATH", str(PROJECT_ROOT / "state" / "adcraft_state_v1.json"))
)

SCRAPE_TIMEOUT = float(os.getenv("ADCRAFT_SCRAPE_TIMEOUT", "12"))
LOG_LEVEL = os.getenv("ADCRAFT_LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    """Set up root logging once; Streamlit reruns the script on every interaction."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def mask_secret(value: str | None) -> str:
    if not value:
        return "MISSING"
    if len(value) <= 8:
        return "***"
    return value[:4] + "..." + value[-4:]


def config_summary() -> list[str]:
    """Effective settings, one line each, with the API key masked."""
    return [
        f"OPENAI_API_KEY = {mask_secret(OPENAI_API_KEY)}",
        f"TEXT_MODEL     = {TEXT_MODEL}",
        f"IMAGE_MODEL    = {IMAGE_MODEL} ({IMAGE_SIZE})",
        f"STATE_PATH     = {STATE_PATH}",
        f"SCRAPE_TIMEOUT = {SCRAPE_TIMEOUT:g}s",
        f"LOG_LEVEL      = {LOG_LEVEL}",
    ]


def print_config_summary() -> None:
    print("Config summary:")
    for line in config_summary():
        print(f"  {line}")


if __name__ == "__main__":
    # python -m config.settings: check what the app will pick up from .env
    print_config_summary()
