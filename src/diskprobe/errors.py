"""Exceptions raised by diskprobe entry points."""


class ScanError(Exception):
    """Base error for a scan that cannot start."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class PathNotFoundError(ScanError):
    """Root path does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "Path does not exist")


class NotADirectoryScanError(ScanError):
    """Root path exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__(path, "Path is not a directory")
