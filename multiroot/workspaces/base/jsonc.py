"""JSON with comments: tolerant parsing and minimal structural edits.

Workspace files are hand-edited, so they may carry ``//`` and ``/* */``
comments and trailing commas.  ``parse`` accepts both.  ``set_property`` and
``remove_property`` compute text ``Edit``s that touch only the targeted
property, leaving every other byte (comments, ordering, formatting) as it
was; ``apply_edits`` applies them.

Usage::

    edits = set_property(text, ["folders"], [{"path": "."}], FormattingOptions())
    text = apply_edits(text, edits)
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

NodeType = Literal["object", "array", "property", "string", "number", "boolean", "null"]
JsonPath = list[str | int]


class JsoncSyntaxError(ValueError):
    """Text is not JSON even with comments and trailing commas allowed."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


# ---------------------------------------------------------------------------
# Edits and formatting
# ---------------------------------------------------------------------------


class FormattingOptions(BaseModel):
    """How inserted JSON is laid out."""

    insert_spaces: bool = False
    tab_size: int = 4
    eol: str = "\n"

    @property
    def indent_unit(self) -> str:
        return " " * self.tab_size if self.insert_spaces else "\t"


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``length`` characters at ``offset`` with ``content``."""

    offset: int
    length: int
    content: str


def apply_edits(text: str, edits: list[Edit]) -> str:
    """Apply non-overlapping edits, last offset first."""
    result = text
    last_modified_offset = len(text)
    for edit in sorted(edits, key=lambda e: e.offset, reverse=True):
        if edit.offset + edit.length > last_modified_offset:
            raise ValueError("Overlapping edit")
        result = result[: edit.offset] + edit.content + result[edit.offset + edit.length :]
        last_modified_offset = edit.offset
    return result


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

_WHITESPACE = " \t\r\n\ufeff"
_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_STRING = re.compile(r'"(?:[^"\\\n\r]|\\.)*"')
_LITERALS = {"true": True, "false": False, "null": None}


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    offset: int
    length: int
    value: Any = None


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    end = len(text)
    while pos < end:
        ch = text[pos]
        if ch in _WHITESPACE:
            pos += 1
        elif text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = end if newline == -1 else newline
        elif text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            if close == -1:
                raise JsoncSyntaxError("Unterminated block comment", pos)
            pos = close + 2
        elif ch in "{}[]:,":
            tokens.append(_Token(ch, pos, 1))
            pos += 1
        elif ch == '"':
            match = _STRING.match(text, pos)
            if match is None:
                raise JsoncSyntaxError("Unterminated string", pos)
            raw = match.group()
            try:
                value = json.loads(raw, strict=False)
            except json.JSONDecodeError as exc:
                raise JsoncSyntaxError(f"Invalid string escape ({exc.msg})", pos) from None
            tokens.append(_Token("string", pos, len(raw), value))
            pos = match.end()
        elif ch == "-" or ch.isdigit():
            match = _NUMBER.match(text, pos)
            if match is None:
                raise JsoncSyntaxError("Invalid number", pos)
            raw = match.group()
            tokens.append(_Token("number", pos, len(raw), json.loads(raw)))
            pos = match.end()
        else:
            for literal, value in _LITERALS.items():
                if text.startswith(literal, pos):
                    kind = "null" if value is None else "boolean"
                    tokens.append(_Token(kind, pos, len(literal), value))
                    pos += len(literal)
                    break
            else:
                raise JsoncSyntaxError(f"Unexpected character {ch!r}", pos)
    return tokens


# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------


@dataclass(eq=False, slots=True)
class Node:
    """A value in the parse tree, with its source range."""

    type: NodeType
    offset: int
    length: int = 0
    value: Any = None
    children: list[Node] = field(default_factory=list)
    parent: Node | None = None

    @property
    def end(self) -> int:
        return self.offset + self.length


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0

    def _peek(self) -> _Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self, expected: str | None = None) -> _Token:
        token = self._peek()
        if token is None:
            raise JsoncSyntaxError("Unexpected end of input", len(self.text))
        if expected is not None and token.kind != expected:
            raise JsoncSyntaxError(f"Expected {expected!r} but found {token.kind!r}", token.offset)
        self.pos += 1
        return token

    def parse_document(self) -> Node | None:
        if self._peek() is None:
            return None
        node = self._parse_value(None)
        trailing = self._peek()
        if trailing is not None:
            raise JsoncSyntaxError("End of file expected", trailing.offset)
        return node

    def _parse_value(self, parent: Node | None) -> Node:
        token = self._next()
        if token.kind == "{":
            return self._parse_object(token, parent)
        if token.kind == "[":
            return self._parse_array(token, parent)
        if token.kind in ("string", "number", "boolean", "null"):
            return Node(token.kind, token.offset, token.length, token.value, parent=parent)  # type: ignore[arg-type]
        raise JsoncSyntaxError(f"Value expected but found {token.kind!r}", token.offset)

    def _parse_object(self, start: _Token, parent: Node | None) -> Node:
        node = Node("object", start.offset, parent=parent)
        while True:
            token = self._peek()
            if token is not None and token.kind == "}":
                break
            key = self._next("string")
            prop = Node("property", key.offset, parent=node)
            prop.children.append(Node("string", key.offset, key.length, key.value, parent=prop))
            self._next(":")
            value = self._parse_value(prop)
            prop.children.append(value)
            prop.length = value.end - prop.offset
            node.children.append(prop)

            token = self._peek()
            if token is not None and token.kind == ",":
                self._next()
                continue
            break
        close = self._next("}")
        node.length = close.offset + 1 - node.offset
        return node

    def _parse_array(self, start: _Token, parent: Node | None) -> Node:
        node = Node("array", start.offset, parent=parent)
        while True:
            token = self._peek()
            if token is not None and token.kind == "]":
                break
            node.children.append(self._parse_value(node))

            token = self._peek()
            if token is not None and token.kind == ",":
                self._next()
                continue
            break
        close = self._next("]")
        node.length = close.offset + 1 - node.offset
        return node


def parse_tree(text: str) -> Node | None:
    """Parse ``text`` into a node tree.  Returns ``None`` for an empty document."""
    return _Parser(text).parse_document()


def get_node_value(node: Node) -> Any:
    if node.type == "object":
        return {prop.children[0].value: get_node_value(prop.children[1]) for prop in node.children}
    if node.type == "array":
        return [get_node_value(child) for child in node.children]
    return node.value


def parse(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas.

    Returns ``None`` for a document without any value.  Raises
    ``JsoncSyntaxError`` for anything else that is not JSON.
    """
    root = parse_tree(text)
    return get_node_value(root) if root is not None else None


def find_node_at_location(root: Node | None, path: JsonPath) -> Node | None:
    """Return the value node addressed by ``path`` (object keys, array indexes)."""
    node = root
    for segment in path:
        if node is None:
            return None
        if isinstance(segment, str):
            if node.type != "object":
                return None
            for prop in node.children:
                if prop.children[0].value == segment:
                    node = prop.children[1]
                    break
            else:
                return None
        else:
            if node.type != "array" or not 0 <= segment < len(node.children):
                return None
            node = node.children[segment]
    return node


# ---------------------------------------------------------------------------
# Structural edits
# ---------------------------------------------------------------------------


def _line_indent(text: str, offset: int) -> str:
    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    indent_end = line_start
    while indent_end < len(text) and text[indent_end] in " \t":
        indent_end += 1
    return text[line_start:indent_end]


def _serialize(value: Any, options: FormattingOptions, base_indent: str) -> str:
    content = json.dumps(value, indent=options.indent_unit, ensure_ascii=False)
    return content.replace("\n", options.eol + base_indent)


def set_property(text: str, path: JsonPath, value: Any, options: FormattingOptions) -> list[Edit]:
    """Edits that set the property at ``path`` to ``value``.

    An existing value is replaced in place; a missing property is appended to
    its parent object, creating missing parent objects on the way.
    """
    if not path:
        raise ValueError("Path must not be empty")

    root = parse_tree(text)
    remaining = list(path)
    parent: Node | None = None
    last_segment: str | int = remaining[-1]
    while remaining:
        last_segment = remaining.pop()
        parent = find_node_at_location(root, remaining)
        if parent is None:
            value = {last_segment: value} if isinstance(last_segment, str) else [value]
        else:
            break

    if parent is None:
        content = _serialize(value, options, "")
        if root is None:
            return [Edit(0, len(text), content)]
        return [Edit(root.offset, root.length, content)]

    if parent.type != "object" or not isinstance(last_segment, str):
        raise ValueError(f"Can not set {last_segment!r} on a JSON {parent.type}")

    existing = find_node_at_location(parent, [last_segment])
    if existing is not None:
        base_indent = _line_indent(text, existing.parent.offset if existing.parent else existing.offset)
        return [Edit(existing.offset, existing.length, _serialize(value, options, base_indent))]

    key = json.dumps(last_segment, ensure_ascii=False)
    if parent.children:
        previous = parent.children[-1]
        indent = _line_indent(text, previous.offset)
        new_property = f"{key}: {_serialize(value, options, indent)}"
        return [Edit(previous.end, 0, "," + options.eol + indent + new_property)]

    outer = _line_indent(text, parent.offset)
    indent = outer + options.indent_unit
    new_property = f"{key}: {_serialize(value, options, indent)}"
    content = options.eol + indent + new_property + options.eol + outer
    # replace the (whitespace or comment only) interior of the empty object
    return [Edit(parent.offset + 1, parent.length - 2, content)]


def remove_property(text: str, path: JsonPath, options: FormattingOptions) -> list[Edit]:
    """Edits that remove the property at ``path`` with its separating comma.

    Returns no edits when the property does not exist.
    """
    if not path or not isinstance(path[-1], str):
        raise ValueError("Path must end with a property name")

    root = parse_tree(text)
    if root is None:
        raise ValueError("Can not delete in empty document")

    parent = find_node_at_location(root, path[:-1])
    if parent is None or parent.type != "object":
        return []
    existing = find_node_at_location(parent, path[-1:])
    if existing is None or existing.parent is None:
        return []

    prop = existing.parent
    index = parent.children.index(prop)
    if index > 0:
        previous = parent.children[index - 1]
        return [Edit(previous.end, prop.end - previous.end, "")]
    if len(parent.children) > 1:
        following = parent.children[1]
        return [Edit(prop.offset, following.offset - prop.offset, "")]
    return [Edit(parent.offset + 1, parent.length - 2, "")]
