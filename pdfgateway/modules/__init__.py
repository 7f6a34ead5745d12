"""Feature modules (router + schemas + service per module)."""
