"""
stackpolicy/core/casing.py

Case-transforming serializer.

capitalize_property_names() walks an arbitrary value tree and returns an
equivalent tree whose keys are PascalCase, which is the shape
CloudFormation expects for stack policy bodies.

Key rules:
    Mapping keys         → first character uppercased, nothing else
                           (stringEquals → StringEquals, my_tag → My_tag)
    Dataclass field names → snake_case folded to PascalCase
                           (resource_type → ResourceType)

Value shapes:
    Object  → Mapping, or a dataclass instance (field names are keys)
    Array   → list or tuple (always emitted as list)
    Absent  → ABSENT, or a None-valued dataclass field whose default is None
    Scalar  → anything else, passed through untouched

The walk is schema-agnostic: it knows nothing about statements or
conditions, only about keys and nesting.

ASSUMPTION: input is acyclic. A document literal always is. A cyclic
graph recurses until RecursionError; do not feed this untrusted graphs.
"""

import dataclasses
import re
from collections.abc import Mapping
from typing import Any, Optional


class _Absent:
    """Marker for an optional value that was never set."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


ABSENT = _Absent()

# "_" after a letter or digit, followed by a letter or digit.
# Leading and trailing underscores are not word boundaries.
_WORD_BOUNDARY_RE = re.compile(r"(?<=[A-Za-z0-9])_+([A-Za-z0-9])")


def capitalize_key(key: str) -> str:
    """
    Uppercase the first character of a mapping key and keep the rest.

    Distinct keys stay distinct unless they differ only in their first
    character's case.
    """
    if not key:
        return key
    return key[0].upper() + key[1:]


def pascal_case(key: str) -> str:
    """
    Rewrite a lower-camel or snake case name to upper-camel case.

    Used for dataclass field names and by the loader to normalize keys.
    Not used for mapping keys: folding "a_b" and "aB" together would
    merge two keys.

        stringEquals  → StringEquals
        resource_type → ResourceType
        NotAction     → NotAction

    Already-PascalCase keys come back unchanged, so the rule is idempotent.
    """
    if not key:
        return key
    key = _WORD_BOUNDARY_RE.sub(lambda m: m.group(1).upper(), key)
    return key[0].upper() + key[1:]


def capitalize_property_names(scope: Optional[Any], obj: Any) -> Any:
    """
    Return a deep copy of obj with every object key in PascalCase.

    Args:
        scope: Owning node. Its resolve() is applied to every value before
               it is inspected. Pass None to skip resolution.
        obj:   Value tree to transform. Never mutated.

    Returns:
        A new tree built from dicts, lists and the original scalars.
        Absent values are dropped from objects. Values of unknown type are
        passed through as they are; validating them is left to the service
        that consumes the document.
    """
    if scope is not None:
        obj = scope.resolve(obj)

    if obj is ABSENT:
        return ABSENT

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _capitalize_dataclass(scope, obj)

    if isinstance(obj, Mapping):
        return _capitalize_mapping(scope, obj)

    if isinstance(obj, (list, tuple)):
        return [_capitalize_element(scope, item) for item in obj]

    return obj


# ─────────────────────────────────────────────────────────────
# Internals
# ─────────────────────────────────────────────────────────────

def _capitalize_mapping(scope: Optional[Any], obj: Mapping) -> dict:
    out = {}
    for key, value in obj.items():
        new_value = capitalize_property_names(scope, value)
        if new_value is ABSENT:
            continue
        new_key = capitalize_key(key) if isinstance(key, str) else key
        out[new_key] = new_value
    return out


def _capitalize_dataclass(scope: Optional[Any], obj: Any) -> dict:
    out = {}
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        # Unset optional field
        if value is None and f.default is None:
            continue
        new_value = capitalize_property_names(scope, value)
        if new_value is ABSENT:
            continue
        out[pascal_case(f.name)] = new_value
    return out


def _capitalize_element(scope: Optional[Any], item: Any) -> Any:
    # Arrays keep their positions: an absent element becomes JSON null.
    new_item = capitalize_property_names(scope, item)
    return None if new_item is ABSENT else new_item
