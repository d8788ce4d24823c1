from .base import WorkStore
from .manifestwork import ManifestWork

__all__ = ["WorkStore", "ManifestWork"]
