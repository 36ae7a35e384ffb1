"""Infrastructure adapters for identity persistence."""
