# config.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# All decks live in one directory (can be overridden with QUIZ_ROOT)
DEFAULT_QUIZ_ROOT = Path.home() / ".quiz"
QUIZ_ROOT = Path(os.getenv("QUIZ_ROOT", DEFAULT_QUIZ_ROOT)).expanduser()

# Logging level for the Streamlit app (DEBUG shows every deck operation)
LOG_LEVEL = os.getenv("QUIZ_LOG_LEVEL", "INFO").upper()


def ensure_root(root=QUIZ_ROOT) -> Path:
    """
    Create the storage directory if it does not exist yet and return it.
    """
    root = Path(root)
    root.mkdir(mode=0o750, parents=True, exist_ok=True)
    return root
