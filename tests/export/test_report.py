# tests/export/test_report.py

import json

import pytest

from abilityscout.config import ScanConfig
from abilityscout.errors import ExportError
from abilityscout.export.report import (
    SCHEMA,
    export,
    filter_by_confidence,
    generate_json,
    generate_markdown,
    generate_summary,
)
from abilityscout.scanner import scan

PLUGIN = """
<?php
register_rest_route( 'myplugin/v1', '/items/(?P<id>\\d+)', array() );
do_action( 'myplugin_create_item', $id, $data );
do_action( "myplugin_status_{$id}" );
$v = apply_filters( 'myplugin_get_items', $v );
add_shortcode( 'myplugin_form', 'cb' );
"""

INFO = {"name": "My Plugin", "version": "1.2.0", "author": "Jane Doe", "url": "https://example.org"}


@pytest.fixture
def result(make_plugin):
    return scan(str(make_plugin({"myplugin.php": PLUGIN})))


def test_filter_by_confidence(result):
    abilities = result.potential_abilities
    assert len(filter_by_confidence(abilities, "low")) == len(abilities)
    assert {a.confidence for a in filter_by_confidence(abilities, "medium")} == {"high", "medium"}
    assert {a.confidence for a in filter_by_confidence(abilities, "high")} == {"high"}
    with pytest.raises(ExportError):
        filter_by_confidence(abilities, "extreme")


def test_generate_json(result):
    data = json.loads(generate_json(result, INFO))
    assert data["$schema"] == SCHEMA
    assert data["generator"].startswith("Abilities Scout ")
    assert data["exported_at"].endswith("Z")
    assert data["plugin"] == INFO
    assert data["scan_stats"]["files_scanned"] == 1
    assert len(data["potential_abilities"]) == result.stats.potential_abilities_count

    first = data["potential_abilities"][0]
    assert first["suggested_name"] == "myplugin/items-id"
    assert first["source"]["full_route"] == "myplugin/v1/items/(?P<id>\\d+)"

    raw = data["raw_discoveries"]
    assert [h["hook_name"] for h in raw["actions"]] == ["myplugin_create_item", "myplugin_status_*"]
    assert raw["actions"][1]["dynamic"] is True
    assert [h["hook_name"] for h in raw["filters"]] == ["myplugin_get_items"]
    assert raw["rest_routes"][0]["route"] == "/items/(?P<id>\\d+)"
    assert raw["shortcodes"] == [{"tag": "myplugin_form", "file": "myplugin.php", "line": 6}]


def test_generate_json_without_plugin_info(result):
    data = json.loads(generate_json(result))
    assert data["plugin"]["name"] == "Unknown plugin"
    assert data["plugin"]["version"] is None


def test_generate_markdown(result):
    md = generate_markdown(result, INFO)
    assert md.startswith("# Abilities Scout Report: My Plugin\n")
    assert "**Plugin:** My Plugin v1.2.0" in md
    assert "**Author:** Jane Doe" in md
    assert "## Scan Summary" in md
    assert "| Files Scanned | 1 |" in md
    assert "### High Confidence (1)" in md
    assert "#### Items by Id" in md
    assert "- **Suggested Name:** `myplugin/create-item`" in md
    assert "- **Dynamic Hook:** yes (name constructed at runtime)" in md
    assert "- **Shortcode:** `[myplugin_form]`" in md
    assert "### Actions (2)" in md
    assert "### Filters (1)" in md
    assert "### REST Routes (1)" in md
    assert "### Shortcodes (1)" in md
    assert "Scan truncated" not in md


def test_markdown_truncation_note_and_empty_result(make_plugin):
    root = make_plugin({"a.php": "<?php\n", "b.php": "<?php\n"})
    md = generate_markdown(scan(str(root), ScanConfig(max_files=1)))
    assert "| **Note** | Scan truncated: 1 of 2 files |" in md
    assert "No potential abilities were discovered in this plugin." in md
    assert "### Actions" not in md


def test_generate_summary(result):
    summary = generate_summary(result)
    assert summary.splitlines()[0] == "Files scanned: 1/1"
    assert "myplugin/items-id" in summary


def test_export_dispatch(result):
    assert json.loads(export(result, "json"))["$schema"] == SCHEMA
    assert export(result, "markdown").startswith("# Abilities Scout Report")
    with pytest.raises(ExportError):
        export(result, "xml")
