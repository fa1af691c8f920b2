"""Domain layer: repository protocols and typed update requests."""
