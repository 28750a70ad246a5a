class AkaError(Exception):
    """Base exception for aka domain errors."""

    pass


class StorageError(AkaError):
    """Raised when the alias database cannot be opened, read, written or committed."""

    pass


class ConfigError(AkaError):
    """Raised when configuration or the environment is unusable."""

    pass


class NotFoundError(AkaError):
    pass


class AliasNotFoundError(NotFoundError):
    """Raised when an alias name is not in the store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Alias not found: {name}")


class ScopeNotFoundError(NotFoundError):
    """Raised when an alias has no definition for the requested scope."""

    def __init__(self, name: str, scope: str):
        self.name = name
        self.scope = scope
        super().__init__(f"No definition found for alias '{name}' in scope '{scope}'")


class InvalidScopeError(AkaError):
    """Raised when a scope directory cannot be resolved to an existing path."""

    def __init__(self, path: str, reason: str = "not an existing directory"):
        self.path = path
        super().__init__(f"Invalid scope path: {path} ({reason})")


class CancelledError(AkaError):
    """Raised when the user declines a confirmation or selection."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)
