# abilityscout/export/report.py

import json
from datetime import datetime, timezone

from abilityscout import __version__
from abilityscout.errors import ExportError

SCHEMA = "abilities-scout/v1"
GENERATOR = f"Abilities Scout {__version__}"
PROJECT_URL = "https://github.com/laxmariappan/abilities-scout"

CONFIDENCE_LEVELS = {"high": 3, "medium": 2, "low": 1}


def filter_by_confidence(abilities, threshold: str = "low"):
    if threshold not in CONFIDENCE_LEVELS:
        raise ExportError(f"Unknown confidence level: {threshold}")
    min_level = CONFIDENCE_LEVELS[threshold]
    return [a for a in abilities if CONFIDENCE_LEVELS.get(a.confidence, 1) >= min_level]


def _plugin_info(plugin_info):
    info = {"name": "Unknown plugin", "version": None, "author": None, "url": None}
    info.update(plugin_info or {})
    return info


def generate_json(result, plugin_info=None) -> str:
    info = _plugin_info(plugin_info)
    raw = result.to_dict()
    export_data = {
        "$schema": SCHEMA,
        "generator": GENERATOR,
        "exported_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "plugin": {
            "name": info["name"],
            "version": info["version"],
            "author": info["author"],
            "url": info["url"],
        },
        "scan_stats": raw["stats"],
        "potential_abilities": raw["potential_abilities"],
        "raw_discoveries": {
            "actions": raw["actions"],
            "filters": raw["filters"],
            "rest_routes": raw["rest_routes"],
            "shortcodes": raw["shortcodes"],
        },
    }
    return json.dumps(export_data, indent=4, ensure_ascii=False)


PREAMBLE = """## How to Use This Document

This document contains scan results from **Abilities Scout**, which analyzed the {name} plugin to discover hooks, REST routes, and shortcodes that could be registered as **abilities** using the WordPress Abilities API.

### What is the Abilities API?

The WordPress Abilities API (WP 6.9+) provides a standardized way to register AI-callable units of functionality. Each ability has a unique name, description, JSON Schema input/output definitions, and an execute callback.

### Registration Pattern

```php
add_action( 'wp_abilities_api_init', function() {{
    wp_register_ability( 'namespace/ability-name', array(
        'label'               => __( 'Human-Readable Label', 'text-domain' ),
        'description'         => __( 'What this ability does, for AI agents.', 'text-domain' ),
        'input_schema'        => array(
            'type'       => 'object',
            'properties' => array(
                'param_name' => array(
                    'type'        => 'string',
                    'description' => 'Parameter description',
                ),
            ),
            'required'             => array( 'param_name' ),
            'additionalProperties' => false,
        ),
        'output_schema'       => array(
            'type'       => 'object',
            'properties' => array(
                'result' => array(
                    'type'        => 'string',
                    'description' => 'Result description',
                ),
            ),
        ),
        'execute_callback'    => 'my_execute_function',
        'permission_callback' => function() {{
            return current_user_can( 'manage_options' );
        }},
    ) );
}} );
```

**Required arguments:** `label`, `description`, `input_schema`, `output_schema`, `execute_callback`

**Optional:** `permission_callback` (defaults to true), `meta` (arbitrary metadata array)

**Ability Name Pattern:** `namespace/ability-name` (lowercase alphanumeric + hyphens, exactly one forward slash)

**Ability Types:**
- **tool** -- Performs an action (create, update, delete, send, etc.)
- **resource** -- Returns data (get, list, check, query, etc.)

### Your Task

Use the potential abilities listed below to generate `wp_register_ability()` code for the {name} plugin. Each entry includes a suggested name, type, confidence score, and the source hook/route/shortcode it was derived from. High-confidence items are the strongest candidates.
"""


def _ability_lines(ability):
    source = ability.source
    lines = [
        f"#### {ability.label}",
        "",
        f"- **Suggested Name:** `{ability.suggested_name}`",
        f"- **Type:** {ability.ability_type}",
        f"- **Confidence:** {ability.confidence} (score: {ability.score})",
        f"- **Source Type:** {ability.source_type.replace('_', ' ')}",
    ]
    if ability.source_type == "rest_route":
        lines.append(f"- **REST Route:** `{source.full_route}`")
        lines.append(f"- **Namespace:** `{source.namespace}`")
        lines.append(f"- **Route Pattern:** `{source.route_pattern}`")
    elif ability.source_type == "shortcode":
        lines.append(f"- **Shortcode:** `[{source.tag}]`")
    else:
        lines.append(f"- **Hook:** `{source.hook_name}`")
        lines.append(f"- **Parameters:** {source.param_count}")
        if source.is_dynamic:
            lines.append("- **Dynamic Hook:** yes (name constructed at runtime)")
    lines.append(f"- **File:** `{source.file}:{source.line}`")
    lines.append("")
    return lines


def _hook_table(title, hooks):
    lines = [
        f"### {title} ({len(hooks)})",
        "",
        "| Hook Name | File | Line | Params | Dynamic |",
        "|-----------|------|------|--------|---------|",
    ]
    for h in hooks:
        lines.append(
            f"| `{h.hook_name}` | {h.file} | {h.line} | {h.param_count} | {'yes' if h.is_dynamic else 'no'} |"
        )
    lines.append("")
    return lines


def generate_markdown(result, plugin_info=None) -> str:
    info = _plugin_info(plugin_info)
    stats = result.stats
    abilities = result.potential_abilities

    lines = [f"# Abilities Scout Report: {info['name']}", ""]
    lines.append(f"**Plugin:** {info['name']}" + (f" v{info['version']}" if info["version"] else ""))
    if info["author"]:
        lines.append(f"**Author:** {info['author']}")
    if info["url"]:
        lines.append(f"**URL:** {info['url']}")
    lines.append(f"**Scanned:** {datetime.now(timezone.utc).strftime('%Y-%m-%d')}")
    lines.append(f"**Generator:** {GENERATOR}")
    lines.append("")

    lines += ["---", ""]
    lines += PREAMBLE.format(name=info["name"]).splitlines()
    lines.append("")

    lines += [
        "---",
        "",
        "## Scan Summary",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Files Scanned | {stats.files_scanned} |",
        f"| Total Hooks | {stats.total_hooks} |",
        f"| REST Routes | {stats.total_routes} |",
        f"| Shortcodes | {stats.total_shortcodes} |",
        f"| Potential Abilities | {stats.potential_abilities_count} |",
        f"| Scan Time | {stats.scan_time_ms}ms |",
    ]
    if stats.truncated:
        lines.append(f"| **Note** | Scan truncated: {stats.files_scanned} of {stats.total_files} files |")
    lines.append("")

    lines += ["---", "", "## Potential Abilities", ""]
    if not abilities:
        lines += ["No potential abilities were discovered in this plugin.", ""]
    else:
        for level in ("high", "medium", "low"):
            group = [a for a in abilities if a.confidence == level]
            if not group:
                continue
            lines += [f"### {level.capitalize()} Confidence ({len(group)})", ""]
            for ability in group:
                lines += _ability_lines(ability)

    lines += ["---", "", "## Raw Discoveries", ""]
    if result.actions:
        lines += _hook_table("Actions", result.actions)
    if result.filters:
        lines += _hook_table("Filters", result.filters)
    if result.routes:
        lines += [
            f"### REST Routes ({len(result.routes)})",
            "",
            "| Route | Namespace | File | Line |",
            "|-------|-----------|------|------|",
        ]
        lines += [f"| `{r.full_route}` | {r.namespace} | {r.file} | {r.line} |" for r in result.routes]
        lines.append("")
    if result.tags:
        lines += [
            f"### Shortcodes ({len(result.tags)})",
            "",
            "| Shortcode | File | Line |",
            "|-----------|------|------|",
        ]
        lines += [f"| `[{t.tag}]` | {t.file} | {t.line} |" for t in result.tags]
        lines.append("")

    lines += ["---", "", f"*Generated by [Abilities Scout]({PROJECT_URL})*"]
    return "\n".join(lines)


def generate_summary(result) -> str:
    stats = result.stats
    lines = [
        f"Files scanned: {stats.files_scanned}/{stats.total_files}"
        + (" (truncated)" if stats.truncated else "")
        + (f", {stats.files_errored} errored" if stats.files_errored else ""),
        f"Hooks: {stats.total_hooks}  REST routes: {stats.total_routes}  Shortcodes: {stats.total_shortcodes}",
        f"Potential abilities: {stats.potential_abilities_count}",
    ]
    for a in result.potential_abilities:
        lines.append(f"  [{a.confidence:<6}] {a.score:>3}  {a.suggested_name:<40} {a.ability_type:<8} {a.label}")
    return "\n".join(lines)


EXPORTERS = {
    "json": generate_json,
    "markdown": generate_markdown,
}


def export(result, fmt: str = "json", plugin_info=None) -> str:
    generator = EXPORTERS.get(fmt)
    if generator is None:
        raise ExportError(f"Unsupported export format: {fmt}")
    return generator(result, plugin_info)
