"""
Fake catalog API for exercising clients without the public services.
"""

from .catalog import create_app
from .server import RunningServer, find_free_port, serve_in_thread

__all__ = ['create_app', 'serve_in_thread', 'find_free_port', 'RunningServer']
