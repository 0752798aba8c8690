class ConfigError(ValueError):
    """Raised at construction when the playfield geometry cannot produce a valid pipe."""
