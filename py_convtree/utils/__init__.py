"""
Shared helpers: node ids and logging setup.
"""

from .ids import new_node_id
from .log_setup import configure_logging

__all__ = ['new_node_id', 'configure_logging']
