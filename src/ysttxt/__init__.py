"""
ysttxt: string-template evaluation engine.

Evaluates compiled templates (literal fragments with `$expr$` markers
plus operation nodes) against a context of data values and produces
HTML text.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Markup parsing or template compilation
    - Page integration (DOM insertion, progress indicators)
    - Template loading over the network or caching

It evaluates templates only. Compiled templates arrive as model objects
or through serialization.py.
"""

from ysttxt.config import EngineConfig
from ysttxt.engine import Engine
from ysttxt.errors import YSTError
from ysttxt.model import UNDEFINED, Context, Operation, OperationNode, op
from ysttxt.registry import TemplateRegistry

__version__ = "0.1.0"

__all__ = [
    "Context",
    "Engine",
    "EngineConfig",
    "Operation",
    "OperationNode",
    "TemplateRegistry",
    "UNDEFINED",
    "YSTError",
    "op",
]
