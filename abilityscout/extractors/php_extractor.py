# abilityscout/extractors/php_extractor.py

import logging
from typing import Iterator, List, Optional

from abilityscout.base.discovery_extractor import DiscoveryExtractor
from abilityscout.extractors.arguments import resolve_dynamic_prefix, resolve_literal, split_arguments
from abilityscout.extractors.php_tokenizer import PhpTokenizer
from abilityscout.models import (
    CallCategory,
    CallSite,
    HookDiscovery,
    RouteDiscovery,
    TagDiscovery,
    Token,
    TokenKind,
)
from abilityscout.registry.call_registry import DEFAULT_TARGET_CALLS, allows_method_call, get_call_category

logger = logging.getLogger(__name__)

MEMBER_ACCESS = (TokenKind.OBJECT_OPERATOR, TokenKind.STATIC_OPERATOR)

# dynamic hook prefixes this short carry no information
MIN_DYNAMIC_PREFIX = 3


def _prev_meaningful_index(tokens, pos):
    j = pos - 1
    while j >= 0 and tokens[j].kind is TokenKind.COMMENT:
        j -= 1
    return j if j >= 0 else None


def _prev_meaningful(tokens, pos):
    j = _prev_meaningful_index(tokens, pos)
    return None if j is None else tokens[j]


def _is_namespace_qualified(tokens, pos):
    # Foo\do_action() and namespace\do_action() call a namespaced function
    sep = _prev_meaningful_index(tokens, pos)
    if sep is None or tokens[sep].kind is not TokenKind.NS_SEPARATOR:
        return False
    before = _prev_meaningful(tokens, sep)
    if before is None:
        return False
    return before.kind is TokenKind.IDENTIFIER or before.text.lower() == "namespace"


def _next_meaningful_index(tokens, pos):
    j = pos
    while j < len(tokens):
        if tokens[j].kind is not TokenKind.COMMENT:
            return j
        j += 1
    return None


def find_call_sites(tokens: List[Token], call_table=DEFAULT_TARGET_CALLS) -> Iterator[CallSite]:
    for i, tok in enumerate(tokens):
        if tok.kind is not TokenKind.IDENTIFIER:
            continue
        category = get_call_category(tok.text, call_table)
        if category is None:
            continue

        # $obj->do_action() and Foo::do_action() are not the hook API.
        # A leading "\" (\do_action()) is still the global function.
        if not allows_method_call(category):
            prev = _prev_meaningful(tokens, i)
            if prev is not None and prev.kind in MEMBER_ACCESS:
                continue
        if _is_namespace_qualified(tokens, i):
            continue

        j = _next_meaningful_index(tokens, i + 1)
        if j is None or tokens[j].kind is not TokenKind.OPEN_PAREN:
            continue

        yield CallSite(
            function_name=tok.text,
            category=category,
            arg_token_groups=split_arguments(tokens, j),
            line=tok.line,
        )


def record_discovery(call: CallSite, rel_path: str):
    args = call.arg_token_groups
    if not args:
        return None

    if call.category in (CallCategory.ACTION, CallCategory.FILTER):
        return _record_hook(call, rel_path)
    if call.category is CallCategory.ROUTE:
        return _record_rest_route(call, rel_path)
    if call.category is CallCategory.TAG:
        return _record_shortcode(call, rel_path)
    return None


def _record_hook(call, rel_path) -> Optional[HookDiscovery]:
    args = call.arg_token_groups
    hook_name = resolve_literal(args[0])
    dynamic = False
    if hook_name is None:
        prefix = resolve_dynamic_prefix(args[0])
        if prefix is None or len(prefix) < MIN_DYNAMIC_PREFIX:
            return None
        hook_name = prefix + "*"
        dynamic = True

    return HookDiscovery(
        hook_name=hook_name,
        is_dynamic=dynamic,
        file=rel_path,
        line=call.line,
        param_count=max(0, len(args) - 1),
        hook_type=call.category.value,
    )


def _record_rest_route(call, rel_path) -> Optional[RouteDiscovery]:
    args = call.arg_token_groups
    if len(args) < 2:
        return None
    namespace = resolve_literal(args[0])
    route = resolve_literal(args[1])
    if namespace is None or route is None:
        return None
    return RouteDiscovery(
        namespace=namespace,
        route_pattern=route,
        full_route=namespace + route,
        file=rel_path,
        line=call.line,
    )


def _record_shortcode(call, rel_path) -> Optional[TagDiscovery]:
    tag = resolve_literal(call.arg_token_groups[0])
    if tag is None:
        return None
    return TagDiscovery(tag=tag, file=rel_path, line=call.line)


class PhpDiscoveryExtractor(DiscoveryExtractor):
    def __init__(self, call_table=DEFAULT_TARGET_CALLS, strict_parse: bool = True):
        self.tokenizer = PhpTokenizer(strict=strict_parse)
        self.call_table = call_table

    def process_file(self, file_path: str, rel_path: str):
        with open(file_path, "rb") as f:
            src = f.read()
        return self.extract_from_source(src, rel_path, file_path)

    def extract_from_source(self, src: bytes, rel_path: str, file_path: str = None):
        """Tokenize ``src`` and return the discoveries it contains, in source order.

        Raises ``TokenizeError`` when the source cannot be parsed.
        """
        tokens = self.tokenizer.tokenize(src, file_path or rel_path)
        discoveries = []
        for call in find_call_sites(tokens, self.call_table):
            found = record_discovery(call, rel_path)
            if found is None:
                logger.debug("Dropped unresolvable %s() call at %s:%d", call.function_name, rel_path, call.line)
                continue
            discoveries.append(found)
        return discoveries
