# Custom exceptions for calcguard

class CalcGuardError(Exception):
    """Base exception for all application-specific errors."""
    pass

class CSSReadError(CalcGuardError):
    """Raised when a stylesheet cannot be read or decoded."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to read {file_path}: {message}")

class ConfigError(CalcGuardError):
    """Raised for configuration-related problems."""
    pass
