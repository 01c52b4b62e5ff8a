"""Core errors, constants and settings."""
