from typing import List, Optional

from abilityscout.extractors.php_tokenizer import meaningful
from abilityscout.models import Token, TokenKind

OPENERS = (TokenKind.OPEN_PAREN, TokenKind.OPEN_BRACKET)
CLOSERS = (TokenKind.CLOSE_PAREN, TokenKind.CLOSE_BRACKET)

# operators binding looser than "." that can replace the concatenated value
LOW_PRECEDENCE_OPERATORS = frozenset({
    "==", "===", "!=", "!==", "<>", "<=>", "<", "<=", ">", ">=",
    "&", "^", "|", "&&", "||", "??", "?", ":", "?:",
    "=", "+=", "-=", "*=", "/=", ".=", "%=", "**=", "??=",
    "&=", "|=", "^=", "<<=", ">>=",
    "and", "or", "xor",
})


def split_arguments(tokens: List[Token], open_index: int) -> List[List[Token]]:
    """Split the call arguments starting at ``tokens[open_index]`` (the ``(``)
    into top-level comma separated token groups.

    Parentheses and brackets both count towards nesting so commas inside
    nested calls and array literals stay within their argument. Stops at the
    parenthesis closing the call; an unterminated call yields the complete
    groups seen so far.
    """
    depth = 0
    args = []
    current = []
    for t in tokens[open_index:]:
        if t.kind in OPENERS:
            depth += 1
            if depth > 1:
                current.append(t)
            continue
        if t.kind in CLOSERS:
            depth -= 1
            if depth == 0:
                if meaningful(current):
                    args.append(current)
                break
            current.append(t)
            continue
        if t.kind is TokenKind.COMMA and depth == 1:
            args.append(current)
            current = []
            continue
        if depth >= 1:
            current.append(t)
    return args


def _strip_named_label(group):
    # named argument: `hook_name: 'value'`
    if len(group) >= 2 and group[0].kind is TokenKind.IDENTIFIER and group[1].text == ":":
        return group[2:]
    return group


def resolve_literal(group: List[Token]) -> Optional[str]:
    """Return the string value of ``group`` when it is fully static: a single
    string literal, or string literals joined with ``.`` (``'my' . 'hook'``)."""
    m = _strip_named_label(meaningful(group))
    if len(m) % 2 == 0:
        return None

    parts = []
    for i, t in enumerate(m):
        if i % 2 == 0:
            if t.kind is not TokenKind.STRING:
                return None
            parts.append(t.value)
        elif t.kind is not TokenKind.CONCAT:
            return None
    return "".join(parts)


def _has_top_level_operator(tokens):
    depth = 0
    for t in tokens:
        if t.kind in OPENERS:
            depth += 1
        elif t.kind in CLOSERS:
            depth -= 1
        elif depth == 0 and t.kind is TokenKind.OTHER and t.text.lower() in LOW_PRECEDENCE_OPERATORS:
            return True
    return False


def resolve_dynamic_prefix(group: List[Token]) -> Optional[str]:
    """Return the literal text every runtime value of ``group`` starts with.

    Only handles a plain concatenation chain whose leading operands are string
    literals, e.g. ``'plugin_' . $suffix`` or ``"plugin_{$suffix}"``. Returns
    None when nothing static leads the expression or when the expression is
    not a plain concatenation.
    """
    m = _strip_named_label(meaningful(group))
    if _has_top_level_operator(m):
        return None

    prefix = ""
    expect_operand = True
    for t in m:
        if expect_operand and t.kind is TokenKind.STRING:
            prefix += t.value
            expect_operand = False
        elif expect_operand and t.kind is TokenKind.INTERPOLATED_STRING:
            prefix += t.value
            break
        elif not expect_operand and t.kind is TokenKind.CONCAT:
            expect_operand = True
        elif expect_operand:
            # first dynamic operand of the chain
            break
        else:
            return None
    return prefix or None
