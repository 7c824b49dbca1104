"""
gitten - A terminal dashboard for a folder full of git repositories
"""

from .__version__ import __version__
from .core import SessionController
from .cli.main import main

__all__ = ["SessionController", "main", "__version__"]
