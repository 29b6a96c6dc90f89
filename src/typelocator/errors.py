__all__ = ["DependencyError", "UnresolvedDependencyError"]


class DependencyError(Exception):
    """Raised when a dependency is misregistered or cannot be keyed by type."""

    pass


class UnresolvedDependencyError(DependencyError):
    """Raised when a required dependency has neither a singleton nor a factory.

    This signals a wiring defect rather than a transient condition, and is not
    caught anywhere inside the library.
    """

    def __init__(self, type_key):
        super().__init__(f"Dependency {type_key.name} could not be resolved")
        self.type_key = type_key
