"""Infrastructure layer - reference store, transports and logging."""
