"""
calcguard User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.calcguard/config.json (cross-project settings)
- Local: .calcguard/config.json (project-specific overrides)

Config structure:
{
  "rule": {
    "enabled": true,                        // Run the operator spacing rule
    "function_names": ["calc", "abs", ...]  // Single-argument math functions
  },
  "scan": {
    "extensions": [".css", ".pcss", ".scss", ".less"],
    "recursive": false
  }
}

CALCGUARD_FUNCTION_NAMES (comma separated) overrides rule.function_names.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from calcguard.exceptions import ConfigError
from calcguard.logging_config import logger
from calcguard.paths import get_paths
from calcguard.quality.config import DEFAULT_EXTENSIONS, SINGLE_ARGUMENT_MATH_FUNCTIONS

DEFAULT_CONFIG = {
    "rule": {
        "enabled": True,
        "function_names": list(SINGLE_ARGUMENT_MATH_FUNCTIONS),
    },
    "scan": {
        "extensions": list(DEFAULT_EXTENSIONS),
        "recursive": False,
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.calcguard/config.json)
    3. Local config (.calcguard/config.json)
    4. CALCGUARD_FUNCTION_NAMES environment variable
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the global config file (tests)
        """
        paths = get_paths(project_root)
        self.project_root = paths.project_root
        self.global_config_path = global_config_path or paths.global_config
        self.local_config_path = paths.local_config

        self._config = self._load_config()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        for path in (self.global_config_path, self.local_config_path):
            if not path.exists():
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load config from {path}: {e}")
                continue

            if not isinstance(data, dict):
                raise ConfigError(f"{path} must contain a JSON object, got {type(data).__name__}")

            config = self._deep_merge(config, data)
            logger.debug(f"Loaded config from {path}")

        for section in DEFAULT_CONFIG:
            if not isinstance(config.get(section), dict):
                raise ConfigError(f"{section} must be an object, got {config.get(section)!r}")

        env_names = os.getenv("CALCGUARD_FUNCTION_NAMES")
        if env_names:
            config["rule"]["function_names"] = [
                name.strip() for name in env_names.split(",") if name.strip()
            ]

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _validate(self) -> None:
        names = self.get("rule.function_names")
        if not isinstance(names, list) or not names or not all(isinstance(n, str) and n for n in names):
            raise ConfigError(
                f"rule.function_names must be a non-empty list of names, got {names!r}"
            )

        extensions = self.get("scan.extensions")
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            raise ConfigError(f"scan.extensions must be a list of strings, got {extensions!r}")

        for key in ("rule.enabled", "scan.recursive"):
            if not isinstance(self.get(key), bool):
                raise ConfigError(f"{key} must be true or false, got {self.get(key)!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "rule.function_names")
            default: Default value if key not found

        Returns:
            Config value
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def function_names(self) -> List[str]:
        return list(self.get("rule.function_names"))

    @property
    def extensions(self) -> List[str]:
        return list(self.get("scan.extensions"))

    @property
    def rule_enabled(self) -> bool:
        return self.get("rule.enabled")

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the merged configuration."""
        return copy.deepcopy(self._config)


def get_user_config(project_root: Optional[Path] = None) -> UserConfig:
    """Load the configuration for a project root (defaults to CWD)."""
    return UserConfig(project_root)
