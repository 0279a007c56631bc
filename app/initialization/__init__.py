"""Application startup and shutdown helpers."""
