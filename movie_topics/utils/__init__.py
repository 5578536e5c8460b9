"""Shared utilities."""

from .parallel import ParallelProcessor

__all__ = ["ParallelProcessor"]
