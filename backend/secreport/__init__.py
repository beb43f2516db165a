"""Security Report Service: store and share security assessment reports."""

__version__ = "1.0.0"
