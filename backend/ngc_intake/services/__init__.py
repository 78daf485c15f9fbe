# Services package
from .errors import RecordNotFound

__all__ = ["RecordNotFound"]
