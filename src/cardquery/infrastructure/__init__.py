"""Infrastructure layer: persistence, caching, security and integrations."""
