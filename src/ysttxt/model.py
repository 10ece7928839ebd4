"""
Core Template Model Objects

Defines the data the engine walks:
    - Operation (the fixed operation library, by name)
    - OperationNode (one operation plus its arguments inside a template)
    - Template (ordered sequence of literal fragments and nodes)
    - Context (values, index, params) bound while a template is evaluated
    - UNDEFINED (the "no value" marker, distinct from None)

ARCHITECTURAL RULE:
    These objects:
        - Hold structure only, they never evaluate themselves
        - Are immutable once built
        - Are produced by an external compiler (or by serialization.py)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .errors import TemplateFormatError


class Undefined:
    """
    Marker for a value that does not exist.

    Expressions may legitimately produce None (a null value, rendered as
    nothing). UNDEFINED is what an out-of-range current element or an
    explicit `undefined` evaluates to, and marker substitution treats it
    as an error.
    """

    _instance: Optional["Undefined"] = None

    def __new__(cls) -> "Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    # undefined == null holds in page expressions (`e1 == null`)
    def __eq__(self, other: object) -> bool:
        return other is None or other is self

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return "undefined"


UNDEFINED = Undefined()


class Operation(Enum):
    """
    The fixed operation library available inside templates.

    Values are the names used in serialized templates. Every operation
    here must have a handler in engine.Engine.
    """

    VALUE = "value"
    LITERAL = "literal"
    APPLY = "apply"
    SELECT = "select"
    IFF = "iff"
    INCLUDE = "include"
    YST_BOOL = "ystBool"

    @property
    def display_name(self) -> str:
        return f"YST.Txt.{self.value}"

    def accepts_arity(self, n: int) -> bool:
        if self is Operation.SELECT:
            # values expression followed by (condition, aux, template) triples
            return n >= 4 and (n - 1) % 3 == 0
        return n == _ARITY[self]


_ARITY = {
    Operation.VALUE: 2,       # aux, template
    Operation.LITERAL: 2,     # aux, template
    Operation.APPLY: 3,       # aux, values, template
    Operation.IFF: 3,         # aux, condition, template
    Operation.INCLUDE: 3,     # aux, target, params
    Operation.YST_BOOL: 1,    # attribute spec
}


@dataclass(frozen=True)
class OperationNode:
    """
    One operation element of a template.

    Example:
        apply over `params.products`, emitting each item:

        OperationNode(Operation.APPLY, (None, "params.products", ("<li>$e$</li>",)))

    Properties:
        operation: Operation enum
        args: Operation arguments. Strings are expression texts, aux
              fragments or include targets; sequences are sub-templates;
              None marks an absent aux.

    IMPORTANT:
        Sub-template arguments are normalized to tuples so a node is
        hashable and cannot be changed after construction.
    """

    operation: Operation
    args: Tuple[Any, ...] = ()

    def __post_init__(self):
        args = tuple(as_template(a) if isinstance(a, (list, tuple)) else a for a in self.args)
        object.__setattr__(self, "args", args)
        if not self.operation.accepts_arity(len(args)):
            raise TemplateFormatError(
                f"{self.operation.display_name} does not accept {len(args)} arguments"
            )


Element = Union[str, OperationNode]
Template = Tuple[Element, ...]


def as_template(elements: Sequence[Any]) -> Template:
    """Return *elements* as an immutable template."""
    if isinstance(elements, str):
        return (elements,)
    return tuple(elements)


def op(operation: Operation, *args: Any) -> OperationNode:
    """Shorthand for building an OperationNode: op(Operation.IFF, None, "e > 1", ["big"])."""
    return OperationNode(operation, args)


@dataclass(frozen=True)
class Context:
    """
    The (values, index, params) triple bound during evaluation.

    Properties:
        values:
            Tuple of value arrays. Empty at top level, one array in
            single-set mode, one per dimension in multi-set mode.

        index:
            Position of the current element inside every dimension.

        params:
            Named parameters, passed down unchanged through nested
            operations and replaced only by include.

    INVARIANTS:
        - Context is never mutated; nested operations build new ones
        - All dimensions are addressed with the same index
    """

    values: Tuple[Sequence[Any], ...] = ()
    index: int = 0
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def element(self, dimension: int = 0) -> Any:
        """Current element of *dimension*, or UNDEFINED when out of range."""
        values = self.values[dimension]
        if 0 <= self.index < len(values):
            return values[self.index]
        return UNDEFINED

    def with_params(self, params: Mapping[str, Any]) -> "Context":
        return Context(self.values, self.index, params)
