"""Core building blocks: logging, models, git and path helpers."""
