"""Layout reflection metadata extraction from C++ headers."""

__version__ = "0.1.0"
