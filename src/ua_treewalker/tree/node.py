"""
User-agent parse tree nodes.

The walker only needs a read-only view of a tree node: its name, its
parent, its ordered children, its text and whether it is a separator.
``ParseTree`` captures that capability; ``UserAgentNode`` is the plain
implementation hosts and tests build trees from.
"""

from typing import Iterable, Iterator, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ParseTree(Protocol):
    """Read-only capability over one node of a parsed user-agent.

    ::: This is-in-layer Domain-Layer.
    ::: This is a protocol.
    ::: This is stateless.
    """

    @property
    def name(self) -> str: ...

    @property
    def parent(self) -> Optional["ParseTree"]: ...

    @property
    def children(self) -> Sequence["ParseTree"]: ...

    @property
    def text(self) -> str: ...

    def child_count(self) -> int: ...

    def child_at(self, index: int) -> "ParseTree": ...

    def is_separator(self) -> bool: ...


class UserAgentNode:
    """
    A node of a parsed user-agent.

    Children are fixed at construction and get their parent assigned
    there; a node can only be attached to one parent.

    Example::

        product = UserAgentNode("product", "Firefox/52.0", [
            UserAgentNode("name", "Firefox"),
            UserAgentNode.separator("/"),
            UserAgentNode("version", "52.0"),
        ])
        agent = UserAgentNode("agent", "Firefox/52.0", [product])

    ::: This is-in-layer Domain-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """

    SEPARATOR_NAME = "separator"

    def __init__(
        self,
        name: str,
        text: str = "",
        children: Iterable["UserAgentNode"] = (),
        separator: bool = False,
    ):
        self._name = name
        self._text = text
        self._children = tuple(children)
        self._separator = separator
        self._parent: Optional["UserAgentNode"] = None
        for child in self._children:
            if child._parent is not None:
                raise ValueError(f"Node {child!r} already has a parent")
            child._parent = self

    @classmethod
    def separator(cls, text: str) -> "UserAgentNode":
        """Create a separator leaf (e.g. '/', ';', ' ')."""
        return cls(cls.SEPARATOR_NAME, text, separator=True)

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional["UserAgentNode"]:
        return self._parent

    @property
    def children(self) -> Sequence["UserAgentNode"]:
        return self._children

    @property
    def text(self) -> str:
        return self._text

    def child_count(self) -> int:
        return len(self._children)

    def child_at(self, index: int) -> "UserAgentNode":
        return self._children[index]

    def is_separator(self) -> bool:
        return self._separator

    def iter_descendants(self) -> Iterator["UserAgentNode"]:
        """Yield this node and all nodes below it, depth first."""
        yield self
        for child in self._children:
            yield from child.iter_descendants()

    def __repr__(self) -> str:
        return f"UserAgentNode({self._name!r}, {self._text!r})"
