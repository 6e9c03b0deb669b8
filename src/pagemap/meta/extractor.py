"""Page metadata extraction from ``definePageMeta({...})`` calls.

Reads literal scalars out of the first metadata declaration in a page:

    <script setup lang="ts">
    definePageMeta({ layout: "admin", auth: true, order: 3, title: t("x") })
    </script>

    -> {"layout": "admin", "auth": True, "order": 3}

Only plain-identifier keys with literal values are kept; computed values
such as ``t("x")`` are skipped.  The script is parsed with tree-sitter's
TypeScript grammar (TSX for ``lang="tsx"``/``"jsx"`` blocks and
``.tsx``/``.jsx`` pages).
"""

from __future__ import annotations

import functools
import re
import sys

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from pagemap._errors import MetadataParseError
from pagemap._types import MetaValue, PageMeta

DEFAULT_MACRO = "definePageMeta"

_SCRIPT_RE = re.compile(r"<script\b([^>]*)>(.*?)</script\s*>", re.DOTALL | re.IGNORECASE)
_SCRIPT_OPEN_RE = re.compile(r"<script\b", re.IGNORECASE)
_LANG_RE = re.compile(r"""\blang\s*=\s*["']?(\w+)""")

_TSX_LANGS = frozenset({"tsx", "jsx"})

# tree-sitter node types that correspond to literal scalars
_LITERAL_TYPES = frozenset({"string", "number", "true", "false", "null"})

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


@functools.cache
def _parser(tsx: bool) -> Parser:
    """Build (once) a tree-sitter parser for TypeScript or TSX."""
    if tsx:
        language = Language(tree_sitter_typescript.language_tsx())
    else:
        language = Language(tree_sitter_typescript.language_typescript())
    return Parser(language)


def find_script_region(contents: str, marker: str) -> tuple[str, str | None] | None:
    """Return the script text containing *marker* and its ``lang`` attribute.

    A file without any ``<script`` tag is all script (``.ts``/``.js``
    pages).  Returns *None* when the marker is outside every script block.

    """
    blocks = list(_SCRIPT_RE.finditer(contents))
    if not blocks:
        if _SCRIPT_OPEN_RE.search(contents):
            return None
        return contents, None

    for block in blocks:
        body = block.group(2)
        if marker in body:
            lang = _LANG_RE.search(block.group(1))
            return body, lang.group(1).lower() if lang else None
    return None


def parse_page_meta(script: str, *, macro: str = DEFAULT_MACRO, tsx: bool = False) -> PageMeta | None:
    """Parse *script* and read the first ``macro({...})`` call's literal properties.

    Returns *None* if there is no such call, its first argument is not an
    object literal, or no property qualifies.

    Raises:
        MetadataParseError: If the script has syntax errors.

    """
    tree = _parser(tsx).parse(script.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        msg = "syntax error in script"
        raise MetadataParseError(msg)

    call = _find_call(root, macro)
    if call is None:
        return None

    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None
    args = [node for node in arguments.named_children if node.type != "comment"]
    if not args or args[0].type != "object":
        return None

    meta: PageMeta = {}
    for prop in args[0].named_children:
        if prop.type != "pair":
            continue
        key = prop.child_by_field_name("key")
        value = prop.child_by_field_name("value")
        if key is None or value is None:
            continue
        if key.type != "property_identifier" or value.type not in _LITERAL_TYPES:
            continue
        try:
            meta[_text(key)] = _literal_value(value)
        except ValueError:
            continue

    return meta or None


def extract_page_meta(
    contents: str,
    *,
    macro: str = DEFAULT_MACRO,
    tsx: bool = False,
    source: str | None = None,
) -> PageMeta | None:
    """Default source-metadata extractor.  Never raises for bad input.

    Args:
        contents: Full text of the page file.
        macro: Name of the metadata declaration call.
        tsx: Parse with the TSX grammar when the file has no ``<script>``
            tag to say otherwise.
        source: File name used in the error message.

    Returns:
        Mapping of metadata key to scalar, or *None* if the page declares
        none (or its script cannot be parsed).

    """
    if macro not in contents:
        return None

    region = find_script_region(contents, macro)
    if region is None:
        return None
    script, lang = region
    use_tsx = tsx if lang is None else lang in _TSX_LANGS

    try:
        return parse_page_meta(script, macro=macro, tsx=use_tsx)
    except MetadataParseError as exc:
        print(f"  Meta parse error: {source or '<page>'}: {exc}", file=sys.stderr)
        return None


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def _find_call(root: Node, macro: str) -> Node | None:
    """First ``macro(...)`` call in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            if function is not None and function.type == "identifier" and _text(function) == macro:
                return node
        stack.extend(reversed(node.children))
    return None


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8")


def _literal_value(node: Node) -> MetaValue:
    kind = node.type
    if kind == "true":
        return True
    if kind == "false":
        return False
    if kind == "null":
        return None
    if kind == "number":
        return _parse_number(_text(node))
    return _unescape(_text(node)[1:-1])


def _parse_number(text: str) -> int | float:
    """JS numeric literal to int/float (``0x1F``, ``1_000``, ``1e3``, ``10n``)."""
    if text.endswith("n"):
        return int(text[:-1], 0)
    try:
        return int(text, 0)
    except ValueError:
        value = float(text.replace("_", ""))
    return int(value) if value.is_integer() else value


def _unescape(body: str) -> str:
    """Resolve JS string escapes in a quoted literal's body."""

    def replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[seq]
        if seq.startswith("u{"):
            code = int(seq[2:-1], 16)
            if code > sys.maxunicode:
                raise ValueError(f"code point out of range in \\{seq}")
            return chr(code)
        if seq[0] in "ux" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        return seq

    return _ESCAPE_RE.sub(replace, body)
