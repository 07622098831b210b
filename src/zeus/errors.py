class ZeusError(Exception):
    """Base error for Project Zeus domain exceptions."""


class MazeConfigError(ZeusError, ValueError):
    """Raised when maze dimensions or tuning values cannot produce a valid maze."""
