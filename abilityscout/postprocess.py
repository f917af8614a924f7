import logging
from typing import List

from abilityscout.models import HookDiscovery, RouteDiscovery, TagDiscovery

logger = logging.getLogger(__name__)


def deduplicate_hooks(records: List[HookDiscovery]) -> List[HookDiscovery]:
    """Collapse repeated hook names, keeping the first-seen location."""
    result = {}
    for record in records:
        seen = result.get(record.hook_name)
        if seen is None:
            record.occurrence_count = 1
            result[record.hook_name] = record
        else:
            seen.occurrence_count += 1
    return list(result.values())


def deduplicate_tags(records: List[TagDiscovery]) -> List[TagDiscovery]:
    result = {}
    for record in records:
        result.setdefault(record.tag, record)
    return list(result.values())


def is_core_hook(hook_name: str, blocklist, internal_prefixes) -> bool:
    for blocked in blocklist:
        if hook_name == blocked:
            return True
        # "wp_ajax_" blocks "wp_ajax_my_action", "load-" blocks "load-edit.php"
        if blocked.endswith(("_", "-")) and hook_name.startswith(blocked):
            return True
    return hook_name.startswith(tuple(internal_prefixes))


def filter_core_hooks(records: List[HookDiscovery], config) -> List[HookDiscovery]:
    kept = [
        r for r in records
        if not is_core_hook(r.hook_name, config.core_hooks_blocklist, config.internal_prefixes)
    ]
    if len(kept) != len(records):
        logger.debug("Filtered %d framework hooks", len(records) - len(kept))
    return kept


def process_hooks(records: List[HookDiscovery], config) -> List[HookDiscovery]:
    hooks = filter_core_hooks(deduplicate_hooks(records), config)
    return sorted(hooks, key=lambda h: h.hook_name)


def process_routes(records: List[RouteDiscovery]) -> List[RouteDiscovery]:
    return sorted(records, key=lambda r: r.full_route)


def process_tags(records: List[TagDiscovery]) -> List[TagDiscovery]:
    return sorted(deduplicate_tags(records), key=lambda t: t.tag)
