"""
Logging setup shared by the CLIs
"""
import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(logs_dir: Path, level: int = logging.INFO):
    """File log gets everything at `level`; the terminal only sees warnings,
    the rest of the console output is printed by the flows themselves."""
    handlers = []
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logs_dir / "cryke.log"))
    except OSError as e:
        print(f"Could not open log file in {logs_dir}: {e}")

    stream = logging.StreamHandler()
    stream.setLevel(logging.WARNING)
    handlers.append(stream)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
