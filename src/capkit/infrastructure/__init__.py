"""Infrastructure layer - registry, composition, logging and locking."""
