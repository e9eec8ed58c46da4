"""
Shared pytest fixtures for the tree walker tests.

Provides a parsed user-agent tree plus the lookups and lookup sets the
matchers in the tests refer to.

The tree is the parse of:

    Mozilla/5.0 (Linux; Android 7.0; Nexus 6) Chrome/57.0 Safari/537.36
"""

import pytest

from ua_treewalker.logging_config import TRACE_LOGGER_NAME, get_trace_logger
from ua_treewalker.tree import UserAgentNode

USER_AGENT = "Mozilla/5.0 (Linux; Android 7.0; Nexus 6) Chrome/57.0 Safari/537.36"


def _product(name, version, comments=None):
    children = [
        UserAgentNode("name", name),
        UserAgentNode.separator("/"),
        UserAgentNode("version", version),
    ]
    text = f"{name}/{version}"
    if comments is not None:
        children.append(comments)
        text = f"{text} {comments.text}"
    return UserAgentNode("product", text, children)


def _comments(*entries):
    children = []
    for i, entry in enumerate(entries):
        if i:
            children.append(UserAgentNode.separator(";"))
        children.append(UserAgentNode("entry", entry, [UserAgentNode("text", entry)]))
    return UserAgentNode("comments", "(" + "; ".join(entries) + ")", children)


def build_agent():
    """Build a fresh tree for the sample user-agent."""
    return UserAgentNode("agent", USER_AGENT, [
        _product("Mozilla", "5.0", _comments("Linux", "Android 7.0", "Nexus 6")),
        UserAgentNode.separator(" "),
        _product("Chrome", "57.0"),
        UserAgentNode.separator(" "),
        _product("Safari", "537.36"),
    ])


def find(tree, *names_and_indices):
    """
    Navigate a tree by (name, one-based index) pairs.

    find(agent, "product", 2, "name", 1) is the name of the second product.
    """
    node = tree
    pairs = zip(names_and_indices[::2], names_and_indices[1::2])
    for name, index in pairs:
        node = [child for child in node.children if child.name == name][index - 1]
    return node


@pytest.fixture
def agent():
    """The parsed sample user-agent."""
    return build_agent()


@pytest.fixture
def lookups():
    """Lookups keyed on lowercase strings."""
    return {
        "BrandLookup": {
            "ff": "Firefox",
            "chrome": "Google Chrome",
        },
        "MobileBrands": {
            "nexus": "Google",
            "galaxy": "Samsung",
        },
    }


@pytest.fixture
def lookup_sets():
    """Lookup sets holding lowercase strings."""
    return {
        "Browsers": {"chrome", "safari", "firefox"},
    }


@pytest.fixture
def trace_messages(caplog):
    """
    Capture the walk trace logger.

    The trace logger does not propagate, so it is switched to propagating
    for the duration of the test; caplog swaps its handler per test phase
    and only sees records that reach the root logger.

    Yields:
        A callable returning the messages logged to the trace logger so far
    """
    trace_logger = get_trace_logger()
    trace_logger.propagate = True

    def messages():
        return [r.getMessage() for r in caplog.records if r.name == TRACE_LOGGER_NAME]

    yield messages
    trace_logger.propagate = False
