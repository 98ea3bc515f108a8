"""
Minimal scope tree used to give a stack policy an identity and a place
to resolve deferred values.

A Scope is a named node with an optional parent. The only behaviour the
serializer relies on is Scope.resolve(), which is consulted at every node
of the tree being serialized.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from stackpolicy.core.exceptions import ScopeError


PATH_SEPARATOR = "/"


class Lazy:
    """
    A value that is not known until serialization time.

    The producer is called with no arguments every time the token is
    resolved; whatever it returns is resolved again.
    """

    def __init__(self, producer: Callable[[], Any]):
        if not callable(producer):
            raise TypeError(
                f"Lazy producer must be callable, got {type(producer).__name__}"
            )
        self._producer = producer

    def produce(self) -> Any:
        return self._producer()

    def __repr__(self) -> str:
        name = getattr(self._producer, "__name__", type(self._producer).__name__)
        return f"Lazy({name})"


class Scope:
    """
    A node in the scope tree.

    Node ids must be non-empty, must not contain '/', and must be unique
    among the children of one parent.
    """

    def __init__(self, scope: Optional["Scope"], node_id: str):
        if not isinstance(node_id, str) or not node_id:
            raise ScopeError(
                "Scope id must be a non-empty string",
                {"node_id": repr(node_id)},
            )
        if PATH_SEPARATOR in node_id:
            raise ScopeError(
                f"Scope id must not contain '{PATH_SEPARATOR}'",
                {"node_id": node_id},
            )

        self._node_id = node_id
        self._parent = scope
        self._children: Dict[str, "Scope"] = {}

        if scope is not None:
            scope._add_child(self)

    # ── Identity ──────────────────────────────────────────────

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def parent(self) -> Optional["Scope"]:
        return self._parent

    @property
    def children(self) -> List["Scope"]:
        return list(self._children.values())

    @property
    def root(self) -> "Scope":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def path(self) -> str:
        """'/'-joined ids from the root down to this node."""
        parts = []
        node = self
        while node is not None:
            parts.append(node._node_id)
            node = node._parent
        return PATH_SEPARATOR.join(reversed(parts))

    def find_child(self, node_id: str) -> Optional["Scope"]:
        return self._children.get(node_id)

    # ── Resolution ────────────────────────────────────────────

    def resolve(self, value: Any) -> Any:
        """
        Turn a deferred or typed value into a plain one.

        Lazy tokens are produced and resolved again, enum members become
        their value. Everything else is returned unchanged, including
        containers: callers walk containers themselves.
        """
        if isinstance(value, Lazy):
            return self.resolve(value.produce())
        if isinstance(value, Enum):
            return value.value
        return value

    # ── Internals ─────────────────────────────────────────────

    def _add_child(self, child: "Scope") -> None:
        if child.node_id in self._children:
            raise ScopeError(
                "There is already a node with this id in the scope",
                {"scope": self.path, "node_id": child.node_id},
            )
        self._children[child.node_id] = child

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"
