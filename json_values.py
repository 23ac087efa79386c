# json_values.py
# Value model produced by the parser: one frozen record per JSON variant.
#
# =============================================================================
#  VALUE MODEL
# =============================================================================
#
# The set of variants is closed and mirrors the grammar exactly:
#
#   JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject
#
# Numbers are a single float type, as the number grammar does not tell
# integers from reals. Objects keep every (key, value) pair in source order,
# duplicates included. Trees are immutable once built.
# =============================================================================

import math
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# VARIANTS
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class JsonNull:
    def __repr__(self) -> str:
        return "Null"


@dataclass(frozen=True)
class JsonBool:
    value: bool

    def __repr__(self) -> str:
        return f"Bool({self.value!r})"


@dataclass(frozen=True)
class JsonNumber:
    value: float

    def __post_init__(self):
        value = float(self.value)
        if not math.isfinite(value):
            raise ValueError(f"JSON numbers must be finite, got {value!r}")
        object.__setattr__(self, "value", value)

    def __repr__(self) -> str:
        return f"Number({self.value!r})"


@dataclass(frozen=True)
class JsonString:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass(frozen=True)
class JsonArray:
    items: Tuple["Value", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __repr__(self) -> str:
        return f"Array({list(self.items)!r})"


@dataclass(frozen=True)
class JsonObject:
    pairs: Tuple[Tuple[str, "Value"], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "pairs", tuple((k, v) for k, v in self.pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self):
        return iter(self.pairs)

    def keys(self) -> List[str]:
        """Keys in source order, repeated keys included."""
        return [k for k, _ in self.pairs]

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        """Look up key; when it repeats, the last pair wins."""
        for k, v in reversed(self.pairs):
            if k == key:
                return v
        return default

    def __repr__(self) -> str:
        return f"Object({list(self.pairs)!r})"


Value = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]

NULL = JsonNull()
TRUE = JsonBool(True)
FALSE = JsonBool(False)


# ---------------------------------------------------------------------------
# CONVERSION
# ---------------------------------------------------------------------------
def to_python(value: Value) -> Any:
    """
    Convert a value tree to plain Python objects.

    Objects become dicts, so repeated keys collapse to their last value.
    """
    root: List[Any] = []
    # Each entry pairs a node with the callable that stores its conversion.
    stack: List[Tuple[Value, Callable[[Any], Any]]] = [(value, root.append)]
    while stack:
        node, store = stack.pop()
        if isinstance(node, JsonNull):
            store(None)
        elif isinstance(node, (JsonBool, JsonNumber, JsonString)):
            store(node.value)
        elif isinstance(node, JsonArray):
            out: List[Any] = []
            store(out)
            stack.extend((v, out.append) for v in reversed(node.items))
        elif isinstance(node, JsonObject):
            obj: Dict[str, Any] = {}
            store(obj)
            stack.extend((v, partial(obj.__setitem__, k)) for k, v in reversed(node.pairs))
        else:
            raise TypeError(f"not a JSON value: {type(node).__name__}")
    return root[0]


# ---------------------------------------------------------------------------
# DEBUG RENDERING
# ---------------------------------------------------------------------------
_INDENT = "  "


def format_tree(value: Value) -> str:
    """
    Render a value tree as an indented outline, one node per line:

        Object
          "name": String('x')
          "tags": Array
            [0] Number(1.0)
    """
    lines: List[str] = []
    # Explicit work stack so rendering depth is not bound by the call stack.
    stack: List[Tuple[Value, str, int]] = [(value, "", 0)]
    while stack:
        node, label, depth = stack.pop()
        pad = _INDENT * depth
        if isinstance(node, JsonArray):
            lines.append(f"{pad}{label}Array" + ("" if node.items else " (empty)"))
            children = [(f"[{i}] ", v) for i, v in enumerate(node.items)]
        elif isinstance(node, JsonObject):
            lines.append(f"{pad}{label}Object" + ("" if node.pairs else " (empty)"))
            children = [(f"{_quote(k)}: ", v) for k, v in node.pairs]
        elif isinstance(node, (JsonNull, JsonBool, JsonNumber, JsonString)):
            lines.append(f"{pad}{label}{node!r}")
            continue
        else:
            raise TypeError(f"not a JSON value: {type(node).__name__}")
        for child_label, child in reversed(children):
            stack.append((child, child_label, depth + 1))
    return "\n".join(lines)


def _quote(key: str) -> str:
    return '"' + key.replace("\\", "\\\\").replace('"', '\\"') + '"'
