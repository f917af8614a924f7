# tests/registry/test_call_registry.py

import pytest

from abilityscout.models import CallCategory
from abilityscout.registry.call_registry import (
    DEFAULT_TARGET_CALLS,
    allows_method_call,
    build_call_table,
    get_call_category,
)


def test_default_table():
    assert get_call_category("do_action") is CallCategory.ACTION
    assert get_call_category("do_action_ref_array") is CallCategory.ACTION
    assert get_call_category("apply_filters") is CallCategory.FILTER
    assert get_call_category("apply_filters_ref_array") is CallCategory.FILTER
    assert get_call_category("register_rest_route") is CallCategory.ROUTE
    assert get_call_category("add_shortcode") is CallCategory.TAG
    assert get_call_category("add_action") is None


def test_default_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TARGET_CALLS["add_action"] = CallCategory.ACTION


def test_only_routes_allow_method_calls():
    assert allows_method_call(CallCategory.ROUTE)
    for category in (CallCategory.ACTION, CallCategory.FILTER, CallCategory.TAG):
        assert not allows_method_call(category)


def test_build_call_table_accepts_values():
    table = build_call_table({"fire": "action", "route": CallCategory.ROUTE, "tag": "shortcode"})
    assert table["fire"] is CallCategory.ACTION
    assert table["route"] is CallCategory.ROUTE
    assert table["tag"] is CallCategory.TAG


def test_build_call_table_rejects_unknown_category():
    with pytest.raises(ValueError):
        build_call_table({"fire": "event"})
