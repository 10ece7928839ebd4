"""
Named entry points for include and top-level rendering.

A compiled page registers each of its templates under a name; the
include operation (and Engine.render_entry) resolve names here instead
of evaluating code. Host applications may also register plain callables.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Optional, Sequence

from ysttxt.errors import IncludeResolutionError
from ysttxt.model import Context, Template, as_template

if TYPE_CHECKING:
    from ysttxt.engine import Engine

EntryPoint = Callable[["Engine", Context], str]


@dataclass(frozen=True)
class RegisteredTemplate:
    """A template entry point: renders through value, or literal when raw."""

    template: Template
    aux: Optional[str] = None
    literal: bool = False

    def __call__(self, engine: "Engine", context: Context) -> str:
        if self.literal:
            return engine.literal(context, self.aux, self.template)
        return engine.value(context, self.aux, self.template)


class TemplateRegistry:
    def __init__(self):
        self._entries: Dict[str, EntryPoint] = {}

    def register(self, name: str, entry: EntryPoint) -> None:
        """Register a callable taking (engine, context) and returning text."""
        if not name:
            raise ValueError("entry point name must not be empty")
        self._entries[name] = entry

    def register_template(
        self,
        name: str,
        template: Sequence[Any],
        aux: Optional[str] = None,
        literal: bool = False,
    ) -> None:
        self.register(name, RegisteredTemplate(as_template(template), aux, literal))

    def lookup(self, name: str) -> EntryPoint:
        try:
            return self._entries[name]
        except KeyError:
            raise IncludeResolutionError(f"Unknown template entry point: {name}") from None

    def templates(self) -> Dict[str, RegisteredTemplate]:
        """Registered templates by name (plain callables are left out)."""
        return {
            name: entry for name, entry in sorted(self._entries.items())
            if isinstance(entry, RegisteredTemplate)
        }

    def names(self) -> list:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)
