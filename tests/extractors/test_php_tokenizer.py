# tests/extractors/test_php_tokenizer.py

import pytest

from abilityscout.errors import TokenizeError
from abilityscout.extractors.php_tokenizer import PhpTokenizer, meaningful
from abilityscout.models import TokenKind

STRUCTURAL = (
    TokenKind.IDENTIFIER, TokenKind.VARIABLE, TokenKind.STRING, TokenKind.INTERPOLATED_STRING,
    TokenKind.OPEN_PAREN, TokenKind.CLOSE_PAREN, TokenKind.COMMA, TokenKind.CONCAT,
    TokenKind.OBJECT_OPERATOR, TokenKind.STATIC_OPERATOR, TokenKind.NS_SEPARATOR,
)


@pytest.fixture(scope="module")
def tokenizer():
    return PhpTokenizer()


def structural(tokens):
    return [(t.kind, t.text) for t in tokens if t.kind in STRUCTURAL]


def test_call_tokens(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("do_action( 'my_hook', $a );\n"))
    assert structural(tokens) == [
        (TokenKind.IDENTIFIER, "do_action"),
        (TokenKind.OPEN_PAREN, "("),
        (TokenKind.STRING, "'my_hook'"),
        (TokenKind.COMMA, ","),
        (TokenKind.VARIABLE, "$a"),
        (TokenKind.CLOSE_PAREN, ")"),
    ]


def test_string_value_is_unquoted(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("""do_action( 'single', "double", 'it\\'s' );\n"""))
    values = [t.value for t in tokens if t.kind is TokenKind.STRING]
    assert values == ["single", "double", "it's"]


def test_lines_are_one_based(tokenizer):
    tokens = tokenizer.tokenize(b"<?php\n\n\ndo_action( 'x' );\n")
    ident = next(t for t in tokens if t.text == "do_action")
    # "<?php" is line 1, two blank lines follow
    assert ident.line == 4


def test_member_and_static_operators(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("$this->do_action( 'a' );\nFoo::do_action( 'b' );\n"))
    kinds = [k for k, _ in structural(tokens)]
    assert TokenKind.OBJECT_OPERATOR in kinds
    assert TokenKind.STATIC_OPERATOR in kinds


def test_namespace_separator(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("\\do_action( 'a' );\n"))
    assert structural(tokens)[:2] == [
        (TokenKind.NS_SEPARATOR, "\\"),
        (TokenKind.IDENTIFIER, "do_action"),
    ]


def test_concatenation(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("apply_filters( 'prefix_' . $type, $v );\n"))
    assert structural(tokens)[2:5] == [
        (TokenKind.STRING, "'prefix_'"),
        (TokenKind.CONCAT, "."),
        (TokenKind.VARIABLE, "$type"),
    ]


@pytest.mark.parametrize("literal", ['"prefix_{$type}"', '"prefix_$type"'])
def test_interpolated_string_keeps_leading_literal(tokenizer, php_source, literal):
    tokens = tokenizer.tokenize(php_source(f"apply_filters( {literal}, $v );\n"))
    interpolated = [t for t in tokens if t.kind is TokenKind.INTERPOLATED_STRING]
    assert len(interpolated) == 1
    assert interpolated[0].value == "prefix_"
    assert interpolated[0].text == literal


def test_interpolation_at_start_has_no_prefix(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source('apply_filters( "{$type}_suffix", $v );\n'))
    interpolated = next(t for t in tokens if t.kind is TokenKind.INTERPOLATED_STRING)
    assert interpolated.value == ""


def test_comments_are_tokens(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("// do_action( 'nope' );\ndo_action( /* c */ 'yes' );\n"))
    comments = [t for t in tokens if t.kind is TokenKind.COMMENT]
    assert len(comments) == 2
    assert all(t.kind is not TokenKind.COMMENT for t in meaningful(tokens))
    # calls inside comments never surface as identifiers
    assert [t.text for t in tokens if t.kind is TokenKind.IDENTIFIER] == ["do_action"]


def test_call_names_inside_strings_are_not_identifiers(tokenizer, php_source):
    tokens = tokenizer.tokenize(php_source("echo 'do_action( \"x\" )';\n"))
    assert not [t for t in tokens if t.kind is TokenKind.IDENTIFIER]


def test_syntax_error_raises(tokenizer, php_source):
    with pytest.raises(TokenizeError):
        tokenizer.tokenize(php_source("function ( {\n"), "broken.php")


def test_lenient_mode_tokenizes_broken_source(php_source):
    tokens = PhpTokenizer(strict=False).tokenize(php_source("do_action( 'ok' );\nfunction ( {\n"))
    assert any(t.text == "do_action" for t in tokens)


def test_inline_html_is_ignored(tokenizer):
    src = b"<html><body>do_action('x')</body></html>\n<?php do_action( 'real' ); ?>\n"
    tokens = tokenizer.tokenize(src)
    assert [t.value for t in tokens if t.kind is TokenKind.STRING] == ["real"]
