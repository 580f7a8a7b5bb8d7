"""
CLI Configuration

Centralized configuration for the calcguard CLI.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Issues shown per file in human mode directory listings
    MAX_ISSUES_PER_FILE = 5

    # Machine mode (JSON output)
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: Optional[bool]) -> None:
        """Set machine mode (pure data output, no presentation); None restores the default"""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the DEFAULT. Returns False only if human mode is
        explicitly requested with --human or CALCGUARD_HUMAN_MODE.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("CALCGUARD_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True
