"""FastAPI dependency factories."""
