"""Domain layer - capability contracts, composites and errors."""
