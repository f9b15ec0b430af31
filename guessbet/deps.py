from guessbet.games.registry import SessionRegistry

_registry: SessionRegistry | None = None


def get_registry() -> SessionRegistry:
    """Process-wide registry, shared by every request."""
    global _registry
    if not _registry:
        _registry = SessionRegistry()
    return _registry
