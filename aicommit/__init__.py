"""Generate git commit messages from staged changes using AI models."""

__version__ = "0.0.3"
__all__ = ["__version__"]