from __future__ import annotations

from .Logger import LaravelStyleLogger, get_logger

__all__ = [
    'LaravelStyleLogger',
    'get_logger'
]
