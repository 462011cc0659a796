"""Configuration: config.yaml defaults with .env and environment overrides, read once at import."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env from project root (parent of lovabolt/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

_config = yaml.safe_load(CONFIG_PATH.read_text())

if os.environ.get("LOVABOLT_STORAGE_DIR"):
    _config["storage_dir"] = os.environ["LOVABOLT_STORAGE_DIR"]


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
