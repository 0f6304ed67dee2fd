"""
Format-agnostic structure produced by decoding JSON or XML response bodies.

Every decoded value is one of four variants:

* :class:`Leaf` - a scalar (JSON string/number/bool/null, XML element text)
* :class:`Attributed` - an XML leaf element carrying attributes; the text is
  kept next to the attribute mapping
* :class:`Node` - a keyed mapping of child values; XML attributes of an
  element with children are kept in ``attributes``
* :class:`Sequence` - an ordered list (JSON arrays, repeated XML siblings)

Domain model factories read decoded values only through the extraction
helpers at the bottom of this module.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Reserved keys of the prefixed-key rendering
TEXT_KEY = "#"
ATTRIBUTE_PREFIX = "@"

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Leaf:
    value: Scalar


@dataclass(frozen=True)
class Attributed:
    text: str
    attributes: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Node:
    children: Mapping[str, "CanonicalValue"] = field(default_factory=dict)
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children) + len(self.attributes)


@dataclass(frozen=True)
class Sequence:
    items: Tuple["CanonicalValue", ...] = ()

    def __len__(self) -> int:
        return len(self.items)


CanonicalValue = Union[Leaf, Attributed, Node, Sequence]

EMPTY = Node()


def from_python(data: Any) -> CanonicalValue:
    """Convert decoded JSON (or plain dicts and lists) into the canonical structure"""
    if isinstance(data, Mapping):
        return Node({str(key): from_python(value) for key, value in data.items()})
    if isinstance(data, (list, tuple)):
        return Sequence(tuple(from_python(item) for item in data))
    return Leaf(data)


def to_python(value: CanonicalValue) -> Any:
    """
    Render a canonical value as plain dicts and lists.

    Attributes become ``@``-prefixed keys and the text of an attributed leaf
    is stored under ``#``.
    """
    if isinstance(value, Leaf):
        return value.value
    if isinstance(value, Attributed):
        rendered: Dict[str, Any] = {TEXT_KEY: value.text}
        rendered.update({ATTRIBUTE_PREFIX + key: text for key, text in value.attributes.items()})
        return rendered
    if isinstance(value, Node):
        rendered = {ATTRIBUTE_PREFIX + key: text for key, text in value.attributes.items()}
        rendered.update({key: to_python(child) for key, child in value.children.items()})
        return rendered
    return [to_python(item) for item in value.items]


# ---------------------------------------------------------------------------
# Extraction helpers
# ---------------------------------------------------------------------------

def is_empty(value: Optional[CanonicalValue]) -> bool:
    """True for absent values, nulls, blank leaves and empty containers"""
    if value is None:
        return True
    if isinstance(value, Leaf):
        return value.value is None or value.value == ""
    if isinstance(value, Attributed):
        return not value.text and not value.attributes
    return len(value) == 0


def lookup(value: Optional[CanonicalValue], key: str) -> Optional[CanonicalValue]:
    """Read a keyed child, falling back to an attribute of the same name"""
    if isinstance(value, Node):
        if key in value.children:
            return value.children[key]
        if key in value.attributes:
            return Leaf(value.attributes[key])
    elif isinstance(value, Attributed):
        if key == TEXT_KEY:
            return Leaf(value.text)
        if key in value.attributes:
            return Leaf(value.attributes[key])
    return None


def scalar(value: Optional[CanonicalValue]) -> Scalar:
    """Scalar content of a leaf or attributed leaf; None for containers"""
    if isinstance(value, Leaf):
        return value.value
    if isinstance(value, Attributed):
        return value.text
    return None


def as_text(value: Optional[CanonicalValue], default: str = "") -> str:
    raw = scalar(value)
    return default if raw is None else str(raw)


def as_int(value: Optional[CanonicalValue], default: int = 0) -> int:
    """Coerce to int; missing, non-numeric or non-finite input yields ``default``"""
    raw = scalar(value)
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
        try:
            raw = float(raw)
        except ValueError:
            return default
    if isinstance(raw, float):
        # NaN and infinities are valid JSON for Python's decoder
        return int(raw) if math.isfinite(raw) else default
    return default


def as_float(value: Optional[CanonicalValue], default: float = 0.0) -> float:
    """Coerce to float; missing, non-numeric or non-finite input yields ``default``"""
    raw = scalar(value)
    if isinstance(raw, (int, float, str)):
        try:
            number = float(raw)
        except (ValueError, OverflowError):
            return default
        return number if math.isfinite(number) else default
    return default


def elements(value: Optional[CanonicalValue]) -> List[CanonicalValue]:
    """
    Enumerate the records held by a list-like value.

    JSON arrays decode to a :class:`Sequence`. XML wraps repeated records in a
    container element (``<videos><video/>...</videos>``), which decodes to a
    :class:`Node` whose values are either a single record or a
    :class:`Sequence` of them.
    """
    if isinstance(value, Sequence):
        return list(value.items)
    if isinstance(value, Node):
        records: List[CanonicalValue] = []
        for child in value.children.values():
            if isinstance(child, Sequence):
                records.extend(child.items)
            else:
                records.append(child)
        return records
    return []
