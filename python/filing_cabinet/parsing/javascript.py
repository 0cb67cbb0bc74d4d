# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""JavaScript parsing and static evaluation.

Parsing is done with tree-sitter's JavaScript grammar. On top of the syntax
tree sits a small evaluator for the literal subset of JavaScript that config
files are written in:

- object, array, string, template string (no substitutions), number,
  boolean, null and undefined literals
- identifiers bound by top-level const/let/var declarations
- __dirname, __filename and process.cwd()
- path.resolve(...) and path.join(...) over evaluable arguments
- string concatenation with +
- member access into evaluated objects

Anything outside that subset evaluates to UNKNOWN. Nothing is ever executed.

Example:
    >>> evaluator = StaticEvaluator.from_source(
    ...     "module.exports = {resolve: {alias: {R: './node_modules/resolve'}}};",
    ...     dirname="/project",
    ... )
    >>> evaluator.module_exports()
    {'resolve': {'alias': {'R': './node_modules/resolve'}}}
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterator, List, Optional, Set

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

JAVASCRIPT = Language(tree_sitter_javascript.language())


class _Unknown:
    """Marker for expressions the evaluator cannot reduce to a value."""

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __bool__(self) -> bool:
        return False


UNKNOWN = _Unknown()

_ESCAPES: Dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_PATH_FUNCTIONS = {"resolve", "join", "normalize", "dirname", "basename"}


def parse_javascript(source: str) -> Tree:
    """Parse JavaScript source into a tree-sitter tree.

    tree-sitter is error tolerant: invalid source still yields a tree, with
    ERROR nodes where parsing failed.
    """
    parser = Parser(JAVASCRIPT)
    return parser.parse(source.encode("utf-8"))


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def callee_name(call: Node) -> str:
    """Dotted name of a call's callee ('define', 'require.config'), or ''."""
    function = call.child_by_field_name("function")
    if function is None:
        return ""
    if function.type in ("identifier", "import"):
        return node_text(function)
    if function.type == "member_expression":
        obj = function.child_by_field_name("object")
        prop = function.child_by_field_name("property")
        if obj is not None and obj.type == "identifier" and prop is not None:
            return f"{node_text(obj)}.{node_text(prop)}"
    return ""


def call_arguments(call: Node) -> List[Node]:
    """Argument expression nodes of a call, comments excluded."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [child for child in arguments.named_children if child.type != "comment"]


def string_value(node: Node) -> Optional[str]:
    """Value of a string literal node, or None for anything else."""
    if node.type == "string":
        parts = []
        for child in node.named_children:
            if child.type == "string_fragment":
                parts.append(node_text(child))
            elif child.type == "escape_sequence":
                parts.append(_decode_escape(node_text(child)))
        return "".join(parts)

    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return node_text(node)[1:-1]

    return None


def _decode_escape(sequence: str) -> str:
    char = sequence[1:2]
    return _ESCAPES.get(char, sequence[1:])


class StaticEvaluator:
    """Evaluates literal JavaScript expressions without running them.

    Attributes:
        tree: Parsed syntax tree
        dirname: Value of __dirname (the directory of the evaluated file)
        filename: Value of __filename
    """

    def __init__(
        self,
        tree: Tree,
        dirname: str,
        filename: Optional[str] = None,
    ) -> None:
        self.tree = tree
        self.dirname = dirname
        self.filename = filename or os.path.join(dirname, "<anonymous>")
        self._bindings: Dict[str, Node] = {}
        self._evaluating: Set[str] = set()
        self._path_aliases: Set[str] = {"path"}
        self._collect_bindings()

    @classmethod
    def from_source(
        cls,
        source: str,
        dirname: str,
        filename: Optional[str] = None,
    ) -> "StaticEvaluator":
        return cls(parse_javascript(source), dirname, filename)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def _collect_bindings(self) -> None:
        """Record top-level `const/let/var name = value` declarations."""
        for statement in self.root.named_children:
            if statement.type not in ("lexical_declaration", "variable_declaration"):
                continue
            for declarator in statement.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name is None or value is None or name.type != "identifier":
                    continue
                self._bindings[node_text(name)] = value
                if value.type == "call_expression" and callee_name(value) == "require":
                    args = call_arguments(value)
                    if args and string_value(args[0]) in ("path", "node:path"):
                        self._path_aliases.add(node_text(name))

    def binding(self, name: str) -> Any:
        """Evaluate the top-level binding called name."""
        if name not in self._bindings or name in self._evaluating:
            return UNKNOWN
        self._evaluating.add(name)
        try:
            return self.evaluate(self._bindings[name])
        finally:
            self._evaluating.discard(name)

    def evaluate(self, node: Optional[Node]) -> Any:
        """Reduce an expression node to a Python value (or UNKNOWN)."""
        if node is None:
            return UNKNOWN

        kind = node.type

        if kind in ("string", "template_string"):
            value = string_value(node)
            return UNKNOWN if value is None else value
        if kind == "number":
            return self._number(node_text(node))
        if kind == "true":
            return True
        if kind == "false":
            return False
        if kind in ("null", "undefined"):
            return None
        if kind == "parenthesized_expression":
            inner = [child for child in node.named_children if child.type != "comment"]
            return self.evaluate(inner[-1]) if inner else UNKNOWN
        if kind == "identifier":
            return self._identifier(node_text(node))
        if kind == "object":
            return self._object(node)
        if kind == "array":
            return self._array(node)
        if kind == "binary_expression":
            return self._binary(node)
        if kind == "member_expression":
            return self._member(node)
        if kind == "call_expression":
            return self._call(node)

        logger.debug(f"Cannot statically evaluate {kind} node")
        return UNKNOWN

    def module_exports(self) -> Any:
        """Value assigned to module.exports (or exported as default)."""
        exported: Any = UNKNOWN
        for statement in self.root.named_children:
            if statement.type == "expression_statement":
                expression = statement.named_children[0] if statement.named_children else None
                if expression is None or expression.type != "assignment_expression":
                    continue
                left = expression.child_by_field_name("left")
                if node_text(left).replace(" ", "") == "module.exports":
                    exported = self.evaluate(expression.child_by_field_name("right"))
            elif statement.type == "export_statement":
                value = statement.child_by_field_name("value")
                if value is not None:
                    exported = self.evaluate(value)
        return exported

    def calls(self, *names: str) -> Iterator[Node]:
        """Yield call_expression nodes whose callee is one of names."""
        wanted = set(names)
        for node in walk(self.root):
            if node.type == "call_expression" and callee_name(node) in wanted:
                yield node

    def _number(self, text: str) -> Any:
        text = text.replace("_", "")
        try:
            if text.lower().startswith(("0x", "0o", "0b")):
                return int(text, 0)
            return float(text) if any(c in text for c in ".eE") else int(text)
        except ValueError:
            return UNKNOWN

    def _identifier(self, name: str) -> Any:
        if name == "__dirname":
            return self.dirname
        if name == "__filename":
            return self.filename
        if name == "undefined":
            return None
        return self.binding(name)

    def _object(self, node: Node) -> Any:
        result: Dict[str, Any] = {}
        for child in node.named_children:
            if child.type == "pair":
                key = self._property_key(child.child_by_field_name("key"))
                if key is UNKNOWN:
                    continue
                value = self.evaluate(child.child_by_field_name("value"))
                if value is UNKNOWN:
                    logger.debug(f"Skipping property {key!r}: value is not a literal")
                    continue
                result[key] = value
            elif child.type == "shorthand_property_identifier":
                name = node_text(child)
                value = self._identifier(name)
                if value is not UNKNOWN:
                    result[name] = value
            elif child.type == "spread_element":
                spread = self.evaluate(child.named_children[0] if child.named_children else None)
                if isinstance(spread, dict):
                    result.update(spread)
        return result

    def _property_key(self, key: Optional[Node]) -> Any:
        if key is None:
            return UNKNOWN
        if key.type in ("property_identifier", "identifier"):
            return node_text(key)
        if key.type == "string":
            return string_value(key)
        if key.type == "number":
            return node_text(key)
        if key.type == "computed_property_name":
            inner = key.named_children[0] if key.named_children else None
            value = self.evaluate(inner)
            return value if isinstance(value, str) else UNKNOWN
        return UNKNOWN

    def _array(self, node: Node) -> Any:
        items = []
        for child in node.named_children:
            if child.type == "comment":
                continue
            value = self.evaluate(child)
            if value is not UNKNOWN:
                items.append(value)
        return items

    def _binary(self, node: Node) -> Any:
        operator = node.child_by_field_name("operator")
        if node_text(operator) != "+":
            return UNKNOWN
        left = self.evaluate(node.child_by_field_name("left"))
        right = self.evaluate(node.child_by_field_name("right"))
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        return UNKNOWN

    def _member(self, node: Node) -> Any:
        obj = self.evaluate(node.child_by_field_name("object"))
        prop = node_text(node.child_by_field_name("property"))
        if isinstance(obj, dict) and prop in obj:
            return obj[prop]
        return UNKNOWN

    def _call(self, node: Node) -> Any:
        name = callee_name(node)
        if name == "process.cwd":
            return os.getcwd()

        owner, _, method = name.partition(".")
        if owner not in self._path_aliases or method not in _PATH_FUNCTIONS:
            return UNKNOWN

        args = [self.evaluate(arg) for arg in call_arguments(node)]
        if not args or not all(isinstance(arg, str) for arg in args):
            return UNKNOWN

        if method == "resolve":
            return os.path.abspath(os.path.join(*args))
        if method == "join":
            return os.path.normpath(os.path.join(*args))
        if method == "normalize":
            return os.path.normpath(args[0])
        if method == "dirname":
            return os.path.dirname(args[0])
        return os.path.basename(args[0])
