"""macOS R toolchain installer."""

__version__ = "1.0.0"
