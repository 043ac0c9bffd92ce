"""Core scanning, bookkeeping and deletion functionality."""

from __future__ import annotations

from .models import ApplicationRecord, DataType, Role, Totals
from .registry import Registry
from .remover import PathRemover
from .size import get_size

__all__ = ["ApplicationRecord", "DataType", "PathRemover", "Registry", "Role", "Totals", "get_size"]
