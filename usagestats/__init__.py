"""Application usage statistics behind a usage-access permission."""

__version__ = "1.0.0"
