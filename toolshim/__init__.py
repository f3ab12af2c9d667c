"""toolshim — short aliases that forward to the CLI tools you already have."""

__version__ = "0.1.0"
