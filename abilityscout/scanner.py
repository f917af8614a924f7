import logging
import os
import time
from dataclasses import dataclass, field
from typing import List

from tqdm import tqdm

from abilityscout.classifier import classify_discoveries
from abilityscout.config import ScanConfig
from abilityscout.errors import TokenizeError
from abilityscout.extractors.php_extractor import PhpDiscoveryExtractor
from abilityscout.models import (
    CallCategory,
    HookDiscovery,
    RouteDiscovery,
    ScanResult,
    ScanStats,
    TagDiscovery,
)
from abilityscout.postprocess import process_hooks, process_routes, process_tags
from abilityscout.utils.walker import find_source_files

logger = logging.getLogger(__name__)


@dataclass
class ScanContext:
    """Everything a single scan accumulates. Created per ``scan()`` call."""

    root_dir: str
    actions: List[HookDiscovery] = field(default_factory=list)
    filters: List[HookDiscovery] = field(default_factory=list)
    routes: List[RouteDiscovery] = field(default_factory=list)
    tags: List[TagDiscovery] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    def add(self, discovery):
        if isinstance(discovery, HookDiscovery):
            if discovery.hook_type == CallCategory.ACTION.value:
                self.actions.append(discovery)
            else:
                self.filters.append(discovery)
        elif isinstance(discovery, RouteDiscovery):
            self.routes.append(discovery)
        elif isinstance(discovery, TagDiscovery):
            self.tags.append(discovery)


def plugin_slug_for(root_dir) -> str:
    return os.path.basename(os.path.normpath(str(root_dir)))


def relative_path(file_path, root_dir) -> str:
    return os.path.relpath(file_path, root_dir).replace(os.sep, "/")


class Scanner:
    def __init__(self, config: ScanConfig = None):
        self.config = config or ScanConfig()
        self.extractor = PhpDiscoveryExtractor(
            call_table=self.config.target_calls,
            strict_parse=self.config.strict_parse,
        )

    def scan(self, root_dir) -> ScanResult:
        start_time = time.perf_counter()
        root_dir = str(root_dir)
        ctx = ScanContext(root_dir=root_dir)

        walk = find_source_files(root_dir, self.config)
        ctx.stats.total_files = walk.total_files
        ctx.stats.truncated = walk.truncated

        files = tqdm(walk.files, desc="Scanning files", disable=not self.config.show_progress)
        for file_path in files:
            self.scan_file(file_path, ctx)

        actions = process_hooks(ctx.actions, self.config)
        filters = process_hooks(ctx.filters, self.config)
        routes = process_routes(ctx.routes)
        tags = process_tags(ctx.tags)

        potential_abilities = classify_discoveries(
            actions, filters, routes, tags, plugin_slug_for(root_dir), self.config
        )

        stats = ctx.stats
        stats.total_hooks = len(actions) + len(filters)
        stats.total_routes = len(routes)
        stats.total_shortcodes = len(tags)
        stats.potential_abilities_count = len(potential_abilities)
        stats.scan_time_ms = round((time.perf_counter() - start_time) * 1000, 1)

        logger.info(
            "Scanned %d/%d files in %s (%d errored): %d hooks, %d routes, %d shortcodes, %d potential abilities",
            stats.files_scanned, stats.total_files, root_dir, stats.files_errored,
            stats.total_hooks, stats.total_routes, stats.total_shortcodes,
            stats.potential_abilities_count,
        )

        return ScanResult(
            potential_abilities=potential_abilities,
            hooks_by_category={
                CallCategory.ACTION.value: actions,
                CallCategory.FILTER.value: filters,
            },
            routes=routes,
            tags=tags,
            stats=stats,
        )

    def scan_file(self, file_path, ctx: ScanContext):
        try:
            size = os.path.getsize(file_path)
        except OSError as e:
            logger.warning("Unable to stat %s: %s", file_path, e)
            ctx.stats.files_errored += 1
            return
        if size > self.config.max_file_size:
            logger.warning("Skipping %s: %d bytes exceeds the %d byte limit", file_path, size, self.config.max_file_size)
            ctx.stats.files_errored += 1
            return

        rel_path = relative_path(file_path, ctx.root_dir)
        try:
            discoveries = self.extractor.process_file(file_path, rel_path)
        except OSError as e:
            logger.warning("Unable to read %s: %s", file_path, e)
            ctx.stats.files_errored += 1
            return
        except TokenizeError as e:
            logger.warning("Unable to parse %s. Skipping it.", e)
            ctx.stats.files_errored += 1
            return

        ctx.stats.files_scanned += 1
        for discovery in discoveries:
            ctx.add(discovery)


def scan(root_dir, config: ScanConfig = None) -> ScanResult:
    return Scanner(config).scan(root_dir)
