"""Parsing JavaScript sources and extracting their require references."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError, ResolutionError

logger = logging.getLogger(__name__)

JS_LANGUAGE = Language(tree_sitter_javascript.language())

# Name of the synchronous module-reference function
REQUIRE_CALLEE = "require"

# Statement kinds that introduce variable declarators (var vs. const/let)
DECLARATION_TYPES = {"variable_declaration", "lexical_declaration"}

SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r",
    "b": "\b", "f": "\f", "v": "\v",
}

# Longest source excerpt quoted in a syntax error diagnostic
MAX_SNIPPET = 40

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(JS_LANGUAGE)
    return _parser


def parse_source(source: Union[str, bytes], path: Optional[Path] = None) -> Tree:
    """
    Parse JavaScript source text into a syntax tree.

    Args:
        source: The source text.
        path: File the text was read from, used in diagnostics.

    Returns:
        The tree-sitter Tree for the source.

    Raises:
        ParseError: If the source contains any syntax error.
    """
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    tree = _get_parser().parse(source_bytes)

    if tree.root_node.has_error:
        raise ParseError(path, list(iter_syntax_errors(tree, path)))

    return tree


def parse_file(file_path: Path) -> Tree:
    """
    Read and parse a JavaScript file.

    Raises:
        ResolutionError: If the file cannot be read as UTF-8 text.
        ParseError: If the file contains a syntax error.
    """
    try:
        content = file_path.read_bytes()
        content.decode("utf-8")
    except OSError as e:
        raise ResolutionError(str(file_path), file_path, reason=e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ResolutionError(str(file_path), file_path, reason="not valid UTF-8") from e

    logger.debug("Parsing %s (%d bytes)", file_path, len(content))
    return parse_source(content, file_path)


def iter_syntax_errors(tree: Tree, path: Optional[Path] = None) -> Iterator[str]:
    """
    Yield one ``path:line:column: message`` diagnostic per error node.

    Lines and columns are 1-based. Error nodes nested inside another error
    node are not reported separately.
    """
    where = str(path) if path is not None else "<source>"
    stack = [tree.root_node]

    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            yield f"{where}:{row + 1}:{column + 1}: {_describe_error(node)}"
            continue
        if node.has_error:
            stack.extend(reversed(node.children))


def _describe_error(node: Node) -> str:
    if node.is_missing:
        return f"expected {node.type!r}"

    snippet = _node_text(node).strip().splitlines()
    if not snippet:
        return "unexpected end of input"
    excerpt = snippet[0]
    if len(excerpt) > MAX_SNIPPET:
        excerpt = excerpt[:MAX_SNIPPET] + "..."
    return f"unexpected {excerpt!r}"


def extract_requires(tree: Tree) -> List[str]:
    """
    Extract the specifiers of top-level ``require`` declarations.

    Only the narrow form ``const|let|var name = require("literal")`` at the
    top level of the module is recognized. Every other shape (destructuring,
    member callees, template or computed arguments, bare call statements,
    nested calls) is skipped without error.

    Args:
        tree: Parsed module. It is only read, never modified.

    Returns:
        Specifier strings in source order, duplicates preserved.
    """
    specifiers: List[str] = []

    for statement in tree.root_node.named_children:
        if statement.type not in DECLARATION_TYPES:
            continue
        for declarator in statement.named_children:
            if declarator.type != "variable_declarator":
                continue
            specifier = _require_specifier(declarator)
            if specifier is not None:
                specifiers.append(specifier)

    return specifiers


def _require_specifier(declarator: Node) -> Optional[str]:
    """Return the literal argument of ``name = require("...")``, if it has that shape."""
    name = declarator.child_by_field_name("name")
    if name is None or name.type != "identifier":
        return None

    call = declarator.child_by_field_name("value")
    if call is None or call.type != "call_expression":
        return None
    # require?.("x") is an optional call, not a require
    if any(child.type == "optional_chain" for child in call.children):
        return None

    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or _node_text(callee) != REQUIRE_CALLEE:
        return None

    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None

    args = [arg for arg in arguments.named_children if arg.type != "comment"]
    if len(args) != 1 or args[0].type != "string":
        return None

    return _string_value(args[0])


def _string_value(node: Node) -> str:
    """Get the cooked value of a string literal node."""
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(_node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(_node_text(child)))
    # Join \uXXXX surrogate pairs into single code points
    return "".join(parts).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _decode_escape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ""

    head = body[0]
    # Legacy octal escape, \0 through \377
    if head in "01234567":
        return chr(int(body, 8))
    if head in SIMPLE_ESCAPES:
        return SIMPLE_ESCAPES[head]
    if head == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == "u":
        digits = body[2:-1] if body.startswith("u{") else body[1:]
        return chr(int(digits, 16))
    # Line continuation
    if head in "\r\n\u2028\u2029":
        return ""
    return head


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8")
