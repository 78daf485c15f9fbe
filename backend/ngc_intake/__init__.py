"""NGC project intake backend: intake wizard, estimates and record persistence."""

__version__ = "0.1.0"
