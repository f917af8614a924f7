# abilityscout/extractors/php_tokenizer.py

import re
from typing import List

import tree_sitter_php
from tree_sitter import Language, Parser

from abilityscout.errors import TokenizeError
from abilityscout.models import Token, TokenKind

LEAF_KINDS = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "[": TokenKind.OPEN_BRACKET,
    "#[": TokenKind.OPEN_BRACKET,
    "{": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    "}": TokenKind.CLOSE_BRACKET,
    ",": TokenKind.COMMA,
    ".": TokenKind.CONCAT,
    "->": TokenKind.OBJECT_OPERATOR,
    "?->": TokenKind.OBJECT_OPERATOR,
    "::": TokenKind.STATIC_OPERATOR,
    "\\": TokenKind.NS_SEPARATOR,
    "name": TokenKind.IDENTIFIER,
    "comment": TokenKind.COMMENT,
}

STRING_NODES = ("string", "encapsed_string")
# node types emitted as a single token instead of being split into leaves
ATOMIC_NODES = ("variable_name", "heredoc", "nowdoc", "shell_command_expression", "text")
LITERAL_PARTS = ("string_content", "string_value", "escape_sequence")

_SINGLE_ESCAPES = re.compile(r"\\([\\'])")
_DOUBLE_ESCAPES = re.compile(r'\\([\\"$])')


def get_node_text(node, src):
    return src[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _unescape(inner, quote):
    pattern = _SINGLE_ESCAPES if quote == "'" else _DOUBLE_ESCAPES
    return pattern.sub(r"\1", inner)


class PhpTokenizer:
    def __init__(self, strict: bool = True):
        self.PHP_LANGUAGE = Language(tree_sitter_php.language_php())
        self.parser = Parser(self.PHP_LANGUAGE)
        self.strict = strict

    def tokenize(self, src: bytes, file_path: str = "<string>") -> List[Token]:
        try:
            tree = self.parser.parse(src)
        except (ValueError, RuntimeError) as e:
            raise TokenizeError(file_path, str(e)) from e

        root = tree.root_node
        if self.strict and root.has_error:
            raise TokenizeError(file_path, f"syntax error near line {_first_error_line(root)}")

        tokens = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in STRING_NODES:
                tokens.append(self._string_token(node, src))
                continue
            if node.type in ATOMIC_NODES:
                kind = TokenKind.VARIABLE if node.type == "variable_name" else TokenKind.OTHER
                tokens.append(Token(kind, get_node_text(node, src), node.start_point[0] + 1))
                continue
            if node.child_count == 0:
                if node.start_byte == node.end_byte:
                    # zero-width MISSING nodes inserted by error recovery
                    continue
                kind = LEAF_KINDS.get(node.type, TokenKind.OTHER)
                tokens.append(Token(kind, get_node_text(node, src), node.start_point[0] + 1))
                continue
            stack.extend(reversed(node.children))
        return tokens

    def _string_token(self, node, src):
        text = get_node_text(node, src)
        line = node.start_point[0] + 1
        body = text[1:] if text[:1] in ("b", "B") else text
        quote = body[:1]

        interpolation = None
        for i, child in enumerate(node.children):
            if child.type in LITERAL_PARTS:
                continue
            if i == 0 and not child.is_named:
                continue  # opening quote
            if not child.is_named and child.end_byte == node.end_byte:
                continue  # closing quote
            interpolation = child
            break
        if interpolation is None:
            return Token(TokenKind.STRING, text, line, _unescape(body[1:-1], quote))

        # literal text between the opening quote and the first interpolated part
        start = node.start_byte + (len(text) - len(body)) + 1
        leading = src[start:interpolation.start_byte].decode("utf-8", errors="replace")
        return Token(TokenKind.INTERPOLATED_STRING, text, line, _unescape(leading, quote))


def _first_error_line(root):
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return root.start_point[0] + 1


def meaningful(tokens):
    return [t for t in tokens if t.kind is not TokenKind.COMMENT]
