"""Weekly availability schedule core for the household chore scheduler."""

__version__ = "0.1.0"
