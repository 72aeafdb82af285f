from .base_repository import TableStore
from .result import StoreFailure, StoreResult

__all__ = ["TableStore", "StoreFailure", "StoreResult"]
