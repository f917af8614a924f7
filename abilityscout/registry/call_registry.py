from types import MappingProxyType

from abilityscout.models import CallCategory

DEFAULT_TARGET_CALLS = MappingProxyType({
    "do_action": CallCategory.ACTION,
    "do_action_ref_array": CallCategory.ACTION,
    "apply_filters": CallCategory.FILTER,
    "apply_filters_ref_array": CallCategory.FILTER,
    "register_rest_route": CallCategory.ROUTE,
    "add_shortcode": CallCategory.TAG,
})

# categories that are commonly invoked as methods and must not be rejected
# when preceded by -> or ::
METHOD_CALLABLE = frozenset({CallCategory.ROUTE})


def build_call_table(entries):
    """Turn a ``{name: category}`` mapping into a read-only call table.

    Categories may be given as ``CallCategory`` members or their string values
    (``"action"``, ``"filter"``, ``"rest_route"``, ``"shortcode"``).
    """
    table = {}
    for name, category in entries.items():
        if not isinstance(category, CallCategory):
            category = CallCategory(category)
        table[name] = category
    return MappingProxyType(table)


def get_call_category(name: str, table=DEFAULT_TARGET_CALLS):
    return table.get(name)


def allows_method_call(category: CallCategory) -> bool:
    return category in METHOD_CALLABLE
