"""
Models package for tool response objects.
"""

from .formatted_response import FormattedResponse, ResponseFormat, ToolError

__all__ = ["FormattedResponse", "ResponseFormat", "ToolError"]
