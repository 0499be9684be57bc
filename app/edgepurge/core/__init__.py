"""Core configuration, paths and errors."""
