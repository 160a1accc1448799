class ForgError(Exception):
    """Base error for the project."""


class InvalidPathError(ForgError, ValueError):
    pass


class InvalidDateFormatError(ForgError, ValueError):
    pass


class ConfigFileError(ForgError):
    pass
