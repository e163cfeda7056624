"""
Component Categories
Built-in component definitions grouped by category.
"""

from .data_display import register_data_display_components
from .inputs import register_input_components
from .layout import register_layout_components
from .feedback import register_feedback_components
from .navigation import register_navigation_components

__all__ = [
    "register_data_display_components",
    "register_input_components",
    "register_layout_components",
    "register_feedback_components",
    "register_navigation_components",
]
