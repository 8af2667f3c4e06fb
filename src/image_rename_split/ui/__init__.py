"""
User interface components.
"""

from .rich_ui import RichSplitUI

__all__ = ["RichSplitUI"]
