"""Core tool abstractions.

- ToolDescriptor: Name, description and ordered parameters of a tool
- ParameterSpec / param(): Declared parameter with kind and default
- ParamKind: The five argument kinds the dispatcher understands
- coerce(): Shared argument coercion returning Ok/Err
"""

from .coercion import ParamKind, coerce
from .schema import ParameterSpec, ToolDescriptor, param

__all__ = [
    "ParamKind",
    "ParameterSpec",
    "ToolDescriptor",
    "coerce",
    "param",
]
