"""Structured JSONL call logging."""

from .request_logger import LogCategory, RequestLogger

__all__ = ["LogCategory", "RequestLogger"]
