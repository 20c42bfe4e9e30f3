import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "step_delay": 0.1,
    "max_steps": 0,
    "show_states": True,
    "log_runs": False,
    "output_directory": "logs/",
    "log_file_prefix": "turing_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "step_delay": (int, float),
    "max_steps": int,
    "show_states": bool,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; only accept it where bool is expected
        value = config[key]
        if not isinstance(value, expected_type) or (isinstance(value, bool) and expected_type is not bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if config["step_delay"] < 0:
        raise ValueError("step_delay must be zero or positive.")
    if config["max_steps"] < 0:
        raise ValueError("max_steps must be zero (unlimited) or positive.")

def load_config(path=None, verbose=False):
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object.")

        # Merge defaults with overrides
        config.update(user_config)

    # Validate schema
    validate_config(config)

    if config["log_runs"]:
        os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def resolve_config_path(path=None):
    """Explicit path wins, then the shipped runtime config, else defaults only."""
    if path is not None:
        return path
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return DEFAULT_CONFIG_PATH
    return None
