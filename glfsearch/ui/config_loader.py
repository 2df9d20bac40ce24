import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any
from glfsearch.core.config_validator import ConfigValidator

logger = logging.getLogger(__name__)

# Flat preference names from older configs -> keys of the 'glf' section
LEGACY_KEYS = {
    "glfPath": "path",
    "showScores": "show_scores",
    "maxResults": "max_results",
    "autoSyncInterval": "auto_sync_interval",
}


def load_config() -> Dict[str, Any]:
    """
    Loads configuration from YAML files and environment variables.
    Returns a dictionary with configuration and status metadata.
    """
    config_status = {
        "status": "OK",
        "error": None,
        "env": get_env(),
        "config_path": None,
        "data": {}
    }

    # --- 1. Read Overrides from ENV ---
    env_override_file = os.environ.get("GLF_SEARCH_CONFIG_FILE")
    env_override_dir = os.environ.get("GLF_SEARCH_CONFIG_DIR")

    env = config_status["env"]

    # --- 2. Determine Config Directory and Files ---
    if env_override_file:
        config_path = Path(env_override_file)
        config_dir = config_path.parent
        files_to_load = [config_path]
        config_status["config_path"] = str(config_path)
        config_status["source"] = "ENV_FILE (GLF_SEARCH_CONFIG_FILE)"
    elif env_override_dir:
        config_dir = Path(env_override_dir)
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "ENV_DIR (GLF_SEARCH_CONFIG_DIR)"
    else:
        project_root = Path(__file__).parent.parent.parent
        config_dir = project_root / "config"
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "DEFAULT (repo/site-packages)"

    # --- 3. Load Configs ---
    loaded_config = {}
    files_found = 0

    try:
        for file_path in files_to_load:
            if file_path.exists():
                files_found += 1
                if not env_override_file:
                    config_status["config_path"] = str(file_path)

                with open(file_path, "r", encoding="utf-8") as f:
                    merge_config(loaded_config, yaml.safe_load(f) or {})

        if files_found == 0:
            config_status["status"] = "ERROR"
            config_status["error"] = f"No config files found in {config_dir} (tried: {[str(f) for f in files_to_load]})"
            return config_status

        # --- 3b. Backward Compatibility ---
        # Map flat preference keys into the 'glf' section.
        # Keys already set in 'glf' win.
        for legacy_key, key in LEGACY_KEYS.items():
            if legacy_key not in loaded_config:
                continue
            val = loaded_config.pop(legacy_key)
            glf_section = loaded_config.setdefault("glf", {})
            if key not in glf_section:
                glf_section[key] = val
                logger.warning(f"DEPRECATED: Top-level '{legacy_key}' found. Mapped to 'glf.{key}'.")
            else:
                logger.info(f"Ignoring top-level '{legacy_key}' because 'glf.{key}' is set.")

        # --- 3c. Validation ---
        validation_errors = ConfigValidator.validate(loaded_config)
        config_status["data"] = loaded_config
        if validation_errors:
            config_status["status"] = "ERROR"
            config_status["error"] = "Invalid Configuration:\n" + "\n".join(validation_errors)
            return config_status

        glf = loaded_config.get("glf", {})
        logger.info(f"Config Loaded: glf.path={glf.get('path')}, auto_sync_interval={glf.get('auto_sync_interval')}")

    except Exception as e:
        config_status["status"] = "ERROR"
        config_status["error"] = str(e)

    return config_status


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merges `override` into `base` in place; nested sections are merged
    key by key so an env file can change a single preference.
    """
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = value
    return base


def get_env() -> str:
    """
    Detects the current environment.
    Checks GLF_SEARCH_ENV, defaults to DEV.
    """
    return os.environ.get("GLF_SEARCH_ENV", "DEV").upper()
