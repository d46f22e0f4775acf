class TxtarError(Exception):
    """Base class for txtar-specific errors."""


# Lookup
class FileNotInArchive(TxtarError, KeyError):
    """Raised by ``Archive[name]`` when no file carries that name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Archive doesn't contain file: {self.name}"


# Filesystem boundary
class UnsafePathError(TxtarError, ValueError):
    pass


class NotTextError(TxtarError, ValueError):
    pass
