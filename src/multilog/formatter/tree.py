"""Indented tree rendering of arbitrary nested values.

Turns scalars, lists and mappings into an indentation-delimited text tree:

    >>> print(render_tree({"user": {"id": 7, "roles": ["admin", "ops"]}}), end="")
    user:
      id: 7
      roles:
        - admin
        - ops

Every line is prefixed with ``unit + indent``. Lists nest four spaces deeper
(the ``- `` marker takes the place of the first line's prefix), mappings two.
Single-line values compact onto their key line. Anything the renderer does
not recognize becomes a bracketed type tag, so rendering never raises.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from numbers import Number

LIST_INDENT = "    "
MAP_INDENT = "  "
DEFAULT_MAX_DEPTH = 32


def is_list_like(value: object) -> bool:
    """Whether a container renders as a dashed list.

    Lists and tuples always do. A mapping does when its keys are exactly the
    ints ``0..n-1`` in that order; ``{0: a, 1: b, 3: c}`` or string keys stay a mapping.
    """
    match value:
        case list() | tuple():
            return True
        case Mapping():
            return all(type(k) is int and k == i for i, k in enumerate(value))
        case _:
            return False


class TreeRenderer:
    """Renders nested values at a fixed indent unit with a depth cap.

    Containers deeper than ``max_depth`` degrade to their type tag instead of recursing.

    Example:
        >>> TreeRenderer(" |  ").render("first\\nsecond", leading="")
        'first\\n |  second\\n'
    """

    __slots__ = ("unit", "max_depth")

    def __init__(self, unit: str = "", max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.unit, self.max_depth = unit, max_depth

    def render(self, value: object, indent: str = "", leading: str | None = None) -> str:
        """Render value; ``leading`` replaces the prefix of the first line only.

        Returns a string ending in exactly one newline, or "" for an empty container.
        """
        return self._render(value, self.unit + indent, leading, 0)

    def _render(self, value: object, prefix: str, leading: str | None, depth: int) -> str:
        match value:
            case None:
                text = "NULL"
            case bool():
                text = "true" if value else "false"
            case str() | Number():
                text = str(value)
            case list() | tuple() | Mapping() if depth >= self.max_depth:
                text = _type_tag(value)
            case list() | tuple():
                return self._render_list(value, prefix, depth)
            case Mapping() if is_list_like(value):
                return self._render_list(value.values(), prefix, depth)
            case Mapping():
                return self._render_mapping(value, prefix, depth)
            case _:
                text = _type_tag(value)
        return indent_text(text, prefix, leading) + "\n"

    def _render_list(self, items: Iterable[object], prefix: str, depth: int) -> str:
        nested = prefix + LIST_INDENT
        parts: list[str] = []
        for item in items:
            rendered = self._render(item, nested, None, depth + 1)
            # empty containers leave a bare marker rather than gluing onto the next item
            parts.append(f"{prefix}- {rendered[len(nested):]}" if rendered else f"{prefix}-\n")
        return "".join(parts)

    def _render_mapping(self, mapping: Mapping[object, object], prefix: str, depth: int) -> str:
        nested = prefix + MAP_INDENT
        parts: list[str] = []
        for key, item in mapping.items():
            rendered = self._render(item, nested, None, depth + 1)
            if rendered.count("\n") == 1:
                parts.append(f"{prefix}{key}: {rendered[len(nested):]}")
            else:
                parts.append(f"{prefix}{key}:\n{rendered}")
        return "".join(parts)


def render_tree(
    value: object,
    unit: str = "",
    indent: str = "",
    leading: str | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render value as an indented tree. See TreeRenderer.render."""
    return TreeRenderer(unit, max_depth).render(value, indent, leading)


def indent_text(text: str, prefix: str, leading: str | None = None) -> str:
    """Trim text and prefix every line; the first line gets ``leading`` when given. No trailing newline."""
    body = text.strip().replace("\r\n", "\n").replace("\r", "\n")
    return (prefix if leading is None else leading) + body.replace("\n", "\n" + prefix)


def _type_tag(value: object) -> str:
    return f"[{type(value).__name__}]"
