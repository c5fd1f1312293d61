"""Launcher: loads .env, sets up logging, then hands off to Streamlit."""
import os
import sys
from pathlib import Path

from streamlit.web import cli as stcli

from settings import configure_logging, load_settings

ROOT = Path(__file__).resolve().parent


def main() -> int:
    os.chdir(ROOT)
    settings = load_settings(ROOT)
    configure_logging(settings.log_level)
    sys.argv = ["streamlit", "run", str(ROOT / "app.py")]
    return stcli.main()


if __name__ == "__main__":
    sys.exit(main())
