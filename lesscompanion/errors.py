class CompanionError(Exception):
    """
    Base class for errors raised while locating, caching, compiling, or writing stylesheets.
    """
    pass


class UnreadableInput(CompanionError):
    pass


class CacheCorrupt(CompanionError):
    pass


class CompilationError(CompanionError):
    """
    The Less compiler rejected the combined source. Carries the input path the source was compiled for.
    """
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class WriteFailure(CompanionError):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
