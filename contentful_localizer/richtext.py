"""Rich text document trees: parsing, leaf text extraction and replacement."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Tuple, Union

BLOCKS = frozenset({
    "document",
    "paragraph",
    "heading-1",
    "heading-2",
    "heading-3",
    "heading-4",
    "heading-5",
    "heading-6",
    "ordered-list",
    "unordered-list",
    "list-item",
    "hr",
    "blockquote",
    "embedded-entry-block",
    "embedded-asset-block",
    "embedded-resource-block",
    "table",
    "table-row",
    "table-cell",
    "table-header-cell",
})

INLINES = frozenset({
    "hyperlink",
    "entry-hyperlink",
    "asset-hyperlink",
    "resource-hyperlink",
    "embedded-entry-inline",
    "embedded-resource-inline",
})


@dataclass(frozen=True)
class TextNode:
    value: str
    marks: Tuple[Dict[str, Any], ...] = ()
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ContainerNode:
    node_type: str
    content: Tuple["Node", ...] = ()
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OpaqueNode:
    """A node type we do not recognise. Kept verbatim and never descended."""

    raw: Dict[str, Any]


Node = Union[TextNode, ContainerNode, OpaqueNode]
Document = ContainerNode


def is_rich_text(payload: Any) -> bool:
    """Check whether a raw field value is a rich text document.

    Args:
        payload: Raw value as returned by the store

    Returns:
        True if the value is a ``document`` node
    """
    return isinstance(payload, dict) and payload.get("nodeType") == "document"


def parse_node(payload: Dict[str, Any]) -> Node:
    node_type = payload.get("nodeType")
    if node_type == "text":
        return TextNode(
            value=payload.get("value", ""),
            marks=tuple(payload.get("marks", ())),
            data=payload.get("data", {}),
        )
    if node_type in BLOCKS or node_type in INLINES:
        return ContainerNode(
            node_type=node_type,
            content=tuple(parse_node(child) for child in payload.get("content", ())),
            data=payload.get("data", {}),
        )
    return OpaqueNode(raw=payload)


def parse_document(payload: Dict[str, Any]) -> Document:
    """Build an immutable tree from a raw rich text value.

    Args:
        payload: Raw ``document`` node

    Returns:
        Root container of the parsed tree

    Raises:
        ValueError: If the payload is not a rich text document
    """
    if not is_rich_text(payload):
        raise ValueError(f"Expected a rich text document, got {type(payload).__name__}")
    return parse_node(payload)


def node_to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, TextNode):
        return {
            "nodeType": "text",
            "value": node.value,
            "marks": list(node.marks),
            "data": node.data,
        }
    if isinstance(node, ContainerNode):
        return {
            "nodeType": node.node_type,
            "data": node.data,
            "content": [node_to_dict(child) for child in node.content],
        }
    return node.raw


def is_empty(document: Document) -> bool:
    return len(document.content) == 0


def iter_leaf_texts(node: Node) -> Iterator[str]:
    """Yield trimmed, non-empty text values in document order."""
    if isinstance(node, TextNode):
        text = node.value.strip()
        if text:
            yield text
    elif isinstance(node, ContainerNode):
        for child in node.content:
            yield from iter_leaf_texts(child)


def extract_leaf_texts(document: Document) -> List[str]:
    """Collect the translatable texts of a document.

    Args:
        document: Parsed rich text document

    Returns:
        Trimmed leaf texts in document order, each value listed once
    """
    return list(dict.fromkeys(iter_leaf_texts(document)))


def replace_leaf_text(node: Node, match_value: str, replacement: str) -> Node:
    """Return a copy of ``node`` with every matching text leaf replaced.

    A leaf matches when its trimmed value equals the trimmed ``match_value``.
    Unchanged subtrees are shared with the input, which is never modified.

    Args:
        node: Tree (usually a document) to translate
        match_value: Default-locale text to look for
        replacement: Text to put in place of each match

    Returns:
        The rebuilt tree
    """
    target = match_value.strip()

    def rebuild(current: Node) -> Node:
        if isinstance(current, TextNode):
            if current.value and current.value.strip() == target:
                return replace(current, value=replacement)
            return current
        if isinstance(current, ContainerNode):
            children = tuple(rebuild(child) for child in current.content)
            if all(new is old for new, old in zip(children, current.content)):
                return current
            return replace(current, content=children)
        return current

    return rebuild(node)
