"""
Configuration for tree construction and logging.
"""

from .config import Settings, settings

__all__ = ['Settings', 'settings']
