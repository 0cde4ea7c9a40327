"""Drawing surface, path builder, text measurement and output backends."""
