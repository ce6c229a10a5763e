"""
Session layer: bulk loading, rendering and timed operations.
"""

from llrbset.engine.loader import KeySetLoader, LoadReport
from llrbset.engine.renderer import TreeRenderer
from llrbset.engine.session import OperationResult, Session

__all__ = ["KeySetLoader", "LoadReport", "OperationResult", "Session", "TreeRenderer"]
