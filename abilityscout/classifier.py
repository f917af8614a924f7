"""Ability classification engine.

Scores each processed discovery, infers whether it would be a "tool" (performs
an action) or a "resource" (returns data), and derives a suggested ability
name of the form ``namespace/ability-name`` plus a human readable label.
"""

import re
from typing import List

from abilityscout.models import (
    CallCategory,
    HookDiscovery,
    PotentialAbility,
    RouteDiscovery,
    TagDiscovery,
)

TOOL = "tool"
RESOURCE = "resource"

HIGH_CONFIDENCE = 60
MEDIUM_CONFIDENCE = 30

ROUTE_BASE_SCORE = 50
TAG_BASE_SCORE = 30

NAME_PATTERN = re.compile(r"^[a-z0-9-]+/[a-z0-9-]+$")
ROUTE_PARAM = re.compile(r"\(\?P<([^>]+)>[^)]+\)")


def score_to_confidence(score: int) -> str:
    if score >= HIGH_CONFIDENCE:
        return "high"
    if score >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def sanitize_name(name: str) -> str:
    """Coerce ``name`` into ``namespace/slug`` with lowercase alphanumeric and
    hyphen segments. Idempotent."""
    name = name.lower().replace("_", "-")

    parts = name.split("/", 1)
    if len(parts) < 2 or not parts[1]:
        parts = [parts[0], "unknown"]

    namespace = re.sub(r"[^a-z0-9-]", "", parts[0])
    slug = re.sub(r"[^a-z0-9-]", "-", parts[1])
    slug = re.sub(r"-+", "-", slug).strip("-")

    return f"{namespace or 'plugin'}/{slug or 'unknown'}"


def has_verb(hook_name: str, verbs) -> bool:
    parts = set(hook_name.lower().split("_"))
    return any(verb in parts for verb in verbs)


def is_infrastructure_hook(hook_name: str, suffixes) -> bool:
    return hook_name.lower().endswith(tuple(suffixes))


def get_plugin_prefixes(plugin_slug: str) -> List[str]:
    prefixes = [plugin_slug.replace("-", "_") + "_"]
    # shorter variant, e.g. "crontrol_" for "wp-crontrol"
    slug_parts = plugin_slug.split("-")
    if len(slug_parts) > 1:
        prefixes.append(slug_parts[-1] + "_")
    return sorted(prefixes, key=len, reverse=True)


def is_plugin_namespaced(hook_name: str, plugin_slug: str) -> bool:
    for prefix in get_plugin_prefixes(plugin_slug):
        if hook_name.startswith(prefix):
            return True
        if hook_name.startswith(prefix.rstrip("_") + "/"):
            return True
    return False


def strip_plugin_prefix(hook_name: str, plugin_slug: str) -> str:
    prefixes = get_plugin_prefixes(plugin_slug)
    for prefix in prefixes:
        if hook_name.startswith(prefix):
            return hook_name[len(prefix):]
    for prefix in prefixes:
        slash_prefix = prefix.rstrip("_") + "/"
        if hook_name.startswith(slash_prefix):
            return hook_name[len(slash_prefix):]
    return hook_name


def detect_ability_type(hook_name: str, hook_type: str, config) -> str:
    if has_verb(hook_name, config.tool_verbs):
        return TOOL
    if has_verb(hook_name, config.resource_verbs):
        return RESOURCE
    return TOOL if hook_type == CallCategory.ACTION.value else RESOURCE


def _ucwords(text: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in text.split(" "))


def generate_label_from_hook(hook_name: str, plugin_slug: str) -> str:
    name = strip_plugin_prefix(hook_name, plugin_slug).rstrip("*")
    label = re.sub(r"[_/-]", " ", name)
    return _ucwords(label).strip()


def generate_label_from_route(route: str) -> str:
    clean = ROUTE_PARAM.sub(r"{\1}", route).strip("/")
    if not clean:
        return "API Root"

    label = []
    for part in clean.split("/"):
        if part.startswith("{"):
            name = part.strip("{}")
            label.append("by " + name[:1].upper() + name[1:])
        else:
            words = re.sub(r"[-_]", " ", part)
            label.append(words[:1].upper() + words[1:])
    return " ".join(label)


def score_hook(hook: HookDiscovery, plugin_slug: str, config) -> int:
    score = 0
    name = hook.hook_name

    if has_verb(name, config.tool_verbs) or has_verb(name, config.resource_verbs):
        score += 20
    if is_plugin_namespaced(name, plugin_slug):
        score += 15

    if hook.param_count >= 2:
        score += 10
    elif hook.param_count >= 1:
        score += 5

    score += -10 if hook.is_dynamic else 5

    if is_infrastructure_hook(name, config.infrastructure_suffixes):
        score -= 30
    return score


def score_rest_route(route: RouteDiscovery, plugin_slug: str) -> int:
    score = ROUTE_BASE_SCORE
    if plugin_slug.lower() in route.namespace.lower():
        score += 15
    if "(?P" not in route.route_pattern:
        score += 5
    return score


def score_shortcode(shortcode: TagDiscovery, plugin_slug: str) -> int:
    score = TAG_BASE_SCORE
    if plugin_slug.replace("-", "_").lower() in shortcode.tag.lower():
        score += 15
    return score


def build_rest_route_ability(route: RouteDiscovery, score: int, plugin_slug: str) -> PotentialAbility:
    clean_route = ROUTE_PARAM.sub(r"\1", route.route_pattern).strip("/").replace("/", "-")
    return PotentialAbility(
        suggested_name=sanitize_name(f"{plugin_slug}/{clean_route or 'api'}"),
        label=generate_label_from_route(route.route_pattern),
        ability_type=RESOURCE,
        confidence=score_to_confidence(score),
        score=score,
        source_type=CallCategory.ROUTE.value,
        source=route,
    )


def build_hook_ability(hook: HookDiscovery, score: int, plugin_slug: str, config) -> PotentialAbility:
    name_part = strip_plugin_prefix(hook.hook_name, plugin_slug)
    return PotentialAbility(
        suggested_name=sanitize_name(f"{plugin_slug}/{name_part.replace('_', '-')}"),
        label=generate_label_from_hook(hook.hook_name, plugin_slug),
        ability_type=detect_ability_type(hook.hook_name, hook.hook_type, config),
        confidence=score_to_confidence(score),
        score=score,
        source_type=hook.hook_type,
        source=hook,
    )


def build_shortcode_ability(shortcode: TagDiscovery, score: int, plugin_slug: str) -> PotentialAbility:
    tag = shortcode.tag
    return PotentialAbility(
        suggested_name=sanitize_name(f"{plugin_slug}/render-{tag.replace('_', '-')}"),
        label="Render " + _ucwords(re.sub(r"[_-]", " ", tag)),
        ability_type=TOOL,
        confidence=score_to_confidence(score),
        score=score,
        source_type=CallCategory.TAG.value,
        source=shortcode,
    )


def classify_discoveries(actions, filters, routes, tags, plugin_slug: str, config) -> List[PotentialAbility]:
    """Score every discovery and return the candidates, best first.

    Discoveries scoring zero or less are not candidates. Equal scores keep the
    order routes, actions, filters, shortcodes, each already sorted by name.
    """
    abilities = []

    for route in routes:
        score = score_rest_route(route, plugin_slug)
        if score > 0:
            abilities.append(build_rest_route_ability(route, score, plugin_slug))

    for hook in list(actions) + list(filters):
        score = score_hook(hook, plugin_slug, config)
        if score > 0:
            abilities.append(build_hook_ability(hook, score, plugin_slug, config))

    for shortcode in tags:
        score = score_shortcode(shortcode, plugin_slug)
        if score > 0:
            abilities.append(build_shortcode_ability(shortcode, score, plugin_slug))

    return sorted(abilities, key=lambda a: a.score, reverse=True)
