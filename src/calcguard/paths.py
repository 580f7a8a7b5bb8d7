"""
calcguard Path Configuration

Centralized path management for calcguard data files.
All paths are relative to the project root (current working directory).

Directory Structure:
.calcguard/
├── config.json          # Project-local configuration
└── logs/                # Log files (opt-in)
"""

from pathlib import Path
from typing import Optional


class CalcGuardPaths:
    """
    Centralized path configuration for calcguard.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    CALCGUARD_DIR = ".calcguard"
    GLOBAL_DIR = Path.home() / ".calcguard"

    CONFIG_NAME = "config.json"
    LOGS_DIR = "logs"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize paths configuration.

        Args:
            project_root: Root directory for the project. Defaults to CWD.
        """
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def calcguard_dir(self) -> Path:
        """Get the .calcguard directory path."""
        return self.project_root / self.CALCGUARD_DIR

    @property
    def local_config(self) -> Path:
        return self.calcguard_dir / self.CONFIG_NAME

    @property
    def global_config(self) -> Path:
        return self.GLOBAL_DIR / self.CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self.calcguard_dir / self.LOGS_DIR

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.calcguard_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


# Global instance for convenience
_default_paths: Optional[CalcGuardPaths] = None


def get_paths(project_root: Optional[Path] = None) -> CalcGuardPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root override

    Returns:
        CalcGuardPaths instance
    """
    global _default_paths
    if project_root is not None:
        return CalcGuardPaths(project_root)
    if _default_paths is None:
        _default_paths = CalcGuardPaths()
    return _default_paths


def reset_paths() -> None:
    """Reset the global paths instance (useful for testing)."""
    global _default_paths
    _default_paths = None
