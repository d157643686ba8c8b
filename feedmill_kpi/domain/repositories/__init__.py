"""
Repositories Package

Interfaces defining how the engine reads record streams. Concrete
implementations live in the infrastructure layer.
"""

from .record_store import IRecordStore

__all__ = ["IRecordStore"]
