"""Code Cleaner: reconciles stylistic drift in a modified text toward its base version."""

__version__ = "0.1.0"
