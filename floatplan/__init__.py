"""Task network editor computing start times, float and the critical path."""

__version__ = "0.1.0"
__all__ = ["__version__"]