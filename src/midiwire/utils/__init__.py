"""Shared utilities."""

from .observer import ObserverManager
from .persistence import read_model, read_model_or_default, write_model

__all__ = ["ObserverManager", "read_model", "read_model_or_default", "write_model"]
