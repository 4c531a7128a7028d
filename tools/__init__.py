"""Model-callable tool catalogues."""

from tools.indy_functions import (
    FUNCTION_DEFINITIONS,
    get_function_names,
    to_tool_definitions,
)

__all__ = [
    "FUNCTION_DEFINITIONS",
    "get_function_names",
    "to_tool_definitions",
]
