"""FastAPI REST API layer."""
