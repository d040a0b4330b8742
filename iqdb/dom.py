"""Parsed HTML documents and the navigation primitives used to walk them.

Pages are parsed with BeautifulSoup on top of html5lib, so the tree matches
what a browser builds (implicit ``tbody`` included). Navigation is by direct
children only: callers name one tag per step and the helpers never descend
further on their own.
"""

from __future__ import annotations

from collections.abc import Iterable

from bs4 import BeautifulSoup
from bs4.element import Doctype, NavigableString, PreformattedString, Tag

from iqdb.errors import StructureError

AttributeConstraints = Iterable[tuple[str, str]]


def parse_document(text: str) -> BeautifulSoup:
    """Parse an HTML page and drop its doctype."""
    # Keep class/rel as raw strings so attribute constraints compare exact values.
    soup = BeautifulSoup(text, "html5lib", multi_valued_attributes=None)
    for node in list(soup.contents):
        if isinstance(node, Doctype):
            node.extract()
    return soup


def attribute_of(node: Tag, name: str) -> str:
    """Return the value of attribute ``name``, or an empty string if absent."""
    value = node.attrs.get(name)
    if value is None:
        return ""
    return str(value)


def filter_children(
    parent: Tag,
    tag: str,
    attrs: AttributeConstraints = (),
) -> list[Tag]:
    """Return the direct element children named ``tag`` that match every constraint."""
    constraints = tuple(attrs)
    matched: list[Tag] = []
    for child in parent.contents:
        if not isinstance(child, Tag) or child.name != tag:
            continue
        if all(attribute_of(child, name) == expected for name, expected in constraints):
            matched.append(child)
    return matched


def first_child(
    parent: Tag,
    tag: str,
    attrs: AttributeConstraints = (),
    *,
    path: str = "",
) -> Tag:
    """Return the first matching direct child or raise ``StructureError``."""
    constraints = tuple(attrs)
    children = filter_children(parent, tag, constraints)
    if not children:
        raise StructureError(describe_step(tag, constraints), path)
    return children[0]


def text_of(node: Tag, *, path: str = "") -> str:
    """Return the content of the first direct text child of ``node``."""
    for child in node.contents:
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            return str(child)
    raise StructureError("text", path or node.name, "element has no text content")


def describe_step(tag: str, attrs: AttributeConstraints = ()) -> str:
    """Render a navigation step as ``tag[name=value]`` for error messages."""
    rendered = "".join(f"[{name}={value}]" for name, value in attrs)
    return f"{tag}{rendered}"


def join_path(*steps: str) -> str:
    return " > ".join(step for step in steps if step)
