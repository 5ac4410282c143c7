"""Tests for the tree builder."""

import pytest

from webdav_api.internal.internal import StructuralError
from webdav_api.tree import EventKind, Node, ParseEvent, build_tree


def open_(tag, level, **attributes):
    return ParseEvent(EventKind.OPEN, tag, level, attributes=attributes)


def text(tag, level, value):
    return ParseEvent(EventKind.TEXT, tag, level, text=value)


def close(tag, level):
    return ParseEvent(EventKind.CLOSE, tag, level)


def render(node: Node):
    """Render a node as nested tuples for comparison."""
    children = None
    if node.children is not None:
        children = {tag: [render(n) for n in nodes] for tag, nodes in node.children.items()}
    return (node.tag, node.value, node.attributes, children)


def test_build_tree_nested_structure():
    """Test that nesting, values and attributes are reproduced."""
    events = [
        open_("d:multistatus", 1),
        open_("d:response", 2, id="r1"),
        open_("d:href", 3),
        text("d:href", 3, "/dav/"),
        close("d:href", 3),
        close("d:response", 2),
        close("d:multistatus", 1),
    ]

    root = build_tree(events)

    assert render(root) == (
        "",
        None,
        None,
        {
            "d:multistatus": [
                (
                    "d:multistatus",
                    None,
                    None,
                    {
                        "d:response": [
                            (
                                "d:response",
                                None,
                                {"id": "r1"},
                                {"d:href": [("d:href", "/dav/", None, None)]},
                            )
                        ]
                    },
                )
            ]
        },
    )
    href = root.first("d:multistatus").first("d:response").first("d:href")
    assert href.level == 3, f"expected level 3, got {href.level}"


def test_build_tree_groups_same_tag_siblings():
    """Test that N same-tag siblings end up in one ordered list."""
    events = [open_("list", 1)]
    for i in range(5):
        events += [open_("item", 2), text("item", 2, str(i)), close("item", 2)]
    events.append(close("list", 1))

    root = build_tree(events)
    items = root.first("list").get("item")

    assert [item.value for item in items] == ["0", "1", "2", "3", "4"]


def test_build_tree_different_tags_are_independent():
    """Test that siblings with different tags get separate entries."""
    events = [
        open_("a", 1),
        open_("b", 2),
        close("b", 2),
        open_("c", 2),
        close("c", 2),
        open_("b", 2),
        close("b", 2),
        close("a", 1),
    ]

    a = build_tree(events).first("a")

    assert list(a.children) == ["b", "c"]
    assert len(a.get("b")) == 2
    assert len(a.get("c")) == 1


def test_build_tree_empty_element_has_no_value_or_children():
    """Test that an empty element leaves value and children absent."""
    root = build_tree([open_("d:collection", 1), close("d:collection", 1)])
    node = root.first("d:collection")

    assert node.value is None
    assert node.children is None
    assert node.attributes is None


def test_build_tree_element_with_children_and_value():
    """Test that a tag may carry both child elements and a value."""
    events = [
        open_("p", 1),
        open_("b", 2),
        text("b", 2, "bold"),
        close("b", 2),
        text("p", 1, "mixed"),
        close("p", 1),
    ]

    p = build_tree(events).first("p")

    assert p.value == "mixed"
    assert p.first("b").value == "bold"


def test_build_tree_deep_nesting():
    """Test that arbitrarily deep nesting is supported."""
    depth = 200
    events = [open_(f"n{i}", i) for i in range(1, depth + 1)]
    events.append(text(f"n{depth}", depth, "leaf"))

    node = build_tree(events)
    for i in range(1, depth + 1):
        node = node.first(f"n{i}")

    assert node.value == "leaf"
    assert node.level == depth


def test_build_tree_parent_is_latest_node_at_previous_level():
    """Test that children attach to the most recent parent."""
    events = [
        open_("root", 1),
        open_("group", 2),
        open_("x", 3),
        close("x", 3),
        close("group", 2),
        open_("group", 2),
        open_("y", 3),
        close("y", 3),
        close("group", 2),
        close("root", 1),
    ]

    first, second = build_tree(events).first("root").get("group")

    assert list(first.children) == ["x"]
    assert list(second.children) == ["y"]


def test_build_tree_missing_parent_level():
    """Test that skipping a level is rejected."""
    with pytest.raises(StructuralError):
        build_tree([open_("a", 1), open_("c", 3)])


def test_build_tree_rejects_reference_into_closed_subtree():
    """Test that a deep event cannot attach to a node from a finished subtree."""
    events = [
        open_("a", 1),
        open_("b", 2),
        open_("c", 3),
        open_("a2", 1),
        open_("x", 3),
    ]

    with pytest.raises(StructuralError):
        build_tree(events)


def test_build_tree_text_without_open_element():
    """Test that text at a level with no open element is rejected."""
    with pytest.raises(StructuralError):
        build_tree([text("a", 1, "orphan")])


def test_build_tree_invalid_level():
    """Test that levels below 1 are rejected."""
    with pytest.raises(StructuralError):
        build_tree([open_("a", 0)])


def test_build_tree_empty_input():
    """Test that no events produce an empty root."""
    root = build_tree([])

    assert root.level == 0
    assert root.children is None
