# tests/test_postprocess.py

from abilityscout.config import CORE_HOOKS_BLOCKLIST, INTERNAL_PREFIXES, ScanConfig
from abilityscout.models import HookDiscovery, RouteDiscovery, TagDiscovery
from abilityscout.postprocess import (
    deduplicate_hooks,
    is_core_hook,
    process_hooks,
    process_routes,
    process_tags,
)


def hook(name, file="a.php", line=1, params=0):
    return HookDiscovery(hook_name=name, is_dynamic=False, file=file, line=line, param_count=params)


def test_deduplicate_keeps_first_location():
    records = [hook("x", "a.php", 3), hook("y", "a.php", 9), hook("x", "b.php", 1), hook("x", "c.php", 7)]
    result = deduplicate_hooks(records)
    assert [(h.hook_name, h.file, h.line, h.occurrence_count) for h in result] == [
        ("x", "a.php", 3, 3),
        ("y", "a.php", 9, 1),
    ]


def test_process_hooks_sorts_and_filters():
    records = [hook("zeta_run"), hook("init"), hook("alpha_get"), hook("wp_ajax_my_action"), hook("alpha_get")]
    result = process_hooks(records, ScanConfig())
    assert [h.hook_name for h in result] == ["alpha_get", "zeta_run"]
    assert result[0].occurrence_count == 2


def test_is_core_hook():
    def core(name):
        return is_core_hook(name, CORE_HOOKS_BLOCKLIST, INTERNAL_PREFIXES)

    assert core("init")
    assert core("save_post")
    assert core("wp_ajax_foo")
    assert core("wp_ajax_nopriv_foo")
    assert core("load-edit.php")
    assert core("bulk_actions-edit-post")
    assert core("manage_users_columns")
    assert core("admin_print_footer_scripts")
    # exact entries only block themselves
    assert not core("init_my_plugin")
    assert not core("save_post_meta_for_me")
    assert not core("myplugin_init")


def test_custom_blocklist():
    config = ScanConfig(core_hooks_blocklist=("myplugin_internal_",), internal_prefixes=())
    result = process_hooks([hook("myplugin_internal_sync"), hook("init")], config)
    assert [h.hook_name for h in result] == ["init"]


def test_routes_sorted_without_dedup():
    routes = [
        RouteDiscovery("ns/v1", "/b", "ns/v1/b", "a.php", 1),
        RouteDiscovery("ns/v1", "/a", "ns/v1/a", "a.php", 2),
        RouteDiscovery("ns/v1", "/a", "ns/v1/a", "b.php", 5),
    ]
    assert [(r.full_route, r.file) for r in process_routes(routes)] == [
        ("ns/v1/a", "a.php"),
        ("ns/v1/a", "b.php"),
        ("ns/v1/b", "a.php"),
    ]


def test_tags_deduplicated_and_sorted():
    tags = [TagDiscovery("form", "b.php", 4), TagDiscovery("button", "a.php", 1), TagDiscovery("form", "a.php", 2)]
    assert [(t.tag, t.file) for t in process_tags(tags)] == [("button", "a.php"), ("form", "b.php")]
