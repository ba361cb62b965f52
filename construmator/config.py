"""Application configuration via environment variables."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

# Storage
DATA_DIR = Path(os.getenv("CONSTRUMATOR_DATA_DIR", str(BASE_DIR / "data")))
PROJECTS_FILE = Path(os.getenv("CONSTRUMATOR_PROJECTS_FILE", str(DATA_DIR / "user_saves.json")))
USERS_FILE = Path(os.getenv("CONSTRUMATOR_USERS_FILE", str(DATA_DIR / "users.json")))

# Sessions
SESSION_HOURS = float(os.getenv("CONSTRUMATOR_SESSION_HOURS", "24"))

# Logging
LOG_LEVEL = os.getenv("CONSTRUMATOR_LOG_LEVEL", "INFO").upper()
