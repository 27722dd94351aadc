"""
Request lifecycle UI model - unified settings
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables
env_file = PROJECT_ROOT / "config" / ".env"
if env_file.exists():
    load_dotenv(env_file)

# Lifecycle model settings
REQUEST_UI_CONFIG = {
    # dashboard "pending" panel size
    "panel_limit": int(os.getenv("PANEL_LIMIT", 3)),
    "historical_max_days": int(os.getenv("HISTORICAL_MAX_DAYS", 7)),
}

# API settings
API_CONFIG = {
    "log_level": os.getenv("LOG_LEVEL", "INFO")
}
