"""Configuration and file locations for Dumb Recipes."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# App directories
APP_NAME = "dumb-recipes"
CONFIG_DIR = Path(os.getenv("DUMB_RECIPES_HOME") or Path.home() / f".{APP_NAME}")
KITCHEN_FILE = CONFIG_DIR / "kitchen.json"  # Pantry and shopping list

# Ensure config directory exists
CONFIG_DIR.mkdir(parents=True, exist_ok=True)

# Recipe catalog: a JSON file path or an http(s) URL
RECIPES_SOURCE = os.getenv("DUMB_RECIPES_SOURCE") or str(CONFIG_DIR / "recipes.json")

# Timeout for fetching a remote catalog, in seconds
HTTP_TIMEOUT = float(os.getenv("DUMB_RECIPES_HTTP_TIMEOUT", "30"))

# Pantry search box
SUGGESTION_LIMIT = 8
