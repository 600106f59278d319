"""Gicker - find the git branch a Docker container's image was built from."""

__version__ = "0.1.0"
