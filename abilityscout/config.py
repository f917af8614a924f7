import dataclasses
import tomllib
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from abilityscout.errors import ConfigError
from abilityscout.models import CallCategory
from abilityscout.registry.call_registry import DEFAULT_TARGET_CALLS, build_call_table

MAX_FILES = 500
MAX_FILE_SIZE = 2 * 1024 * 1024

EXCLUDED_DIRS = (
    "vendor", "node_modules", "tests", "test", "assets",
    "languages", "lib", "libs", ".git", ".github",
)

# verbs that mark a "tool" ability (performs an action)
TOOL_VERBS = (
    "submit", "send", "create", "delete", "update", "process",
    "add", "remove", "save", "run", "export", "import",
    "activate", "deactivate", "clear", "flush", "purge",
    "publish", "unpublish", "approve", "reject", "reset",
    "schedule", "unschedule", "pause", "resume", "trigger",
    "register", "unregister", "enable", "disable", "toggle",
    "insert", "set", "put", "post", "patch", "write",
)

# verbs that mark a "resource" ability (returns data)
RESOURCE_VERBS = (
    "get", "list", "check", "query", "count", "search",
    "fetch", "read", "load", "retrieve", "find", "lookup",
    "verify", "validate", "is", "has", "can",
)

INFRASTRUCTURE_SUFFIXES = (
    "_nonce", "_sanitize", "_enqueue", "_css", "_js",
    "_style", "_script", "_styles", "_scripts",
    "_column", "_columns", "_row", "_rows",
    "_menu", "_submenu", "_notice", "_notices",
    "_message", "_messages", "_class", "_classes",
    "_attr", "_attrs", "_attribute", "_attributes",
    "_template", "_widget", "_widgets",
    "_metabox", "_meta_box", "_meta_boxes",
    "_capability", "_capabilities", "_screen",
    "_tab", "_tabs", "_section", "_sections",
    "_field", "_fields", "_option_page",
    "_display", "_render", "_output", "_html",
    "_markup", "_view", "_form", "_input",
    "_label", "_title", "_heading", "_header",
    "_footer", "_sidebar", "_nav", "_breadcrumb",
    "_link", "_url", "_path", "_icon", "_image",
)

# entries ending in "_" or "-" also block every hook that starts with them
CORE_HOOKS_BLOCKLIST = (
    "init", "wp_init", "admin_init", "plugins_loaded", "after_setup_theme",
    "wp_loaded", "wp_head", "wp_footer", "wp_enqueue_scripts",
    "admin_enqueue_scripts", "admin_menu", "admin_bar_menu", "admin_notices",
    "admin_head", "admin_footer", "wp_dashboard_setup", "widgets_init",
    "register_sidebar", "the_content", "the_title", "the_excerpt", "wp_title",
    "template_redirect", "wp", "parse_request", "pre_get_posts",
    "wp_ajax_", "wp_ajax_nopriv_", "save_post", "delete_post",
    "transition_post_status", "add_meta_boxes", "manage_posts_columns",
    "restrict_manage_posts", "bulk_actions-", "shutdown", "login_head",
    "login_footer", "login_enqueue_scripts", "rest_api_init",
    "wp_default_scripts", "wp_default_styles", "customize_register",
    "customize_preview_init", "switch_theme", "after_switch_theme", "load-",
    "current_screen", "admin_print_scripts", "admin_print_styles",
    "in_admin_header", "wp_before_admin_bar_render", "wp_after_admin_bar_render",
)

INTERNAL_PREFIXES = (
    "admin_print_", "admin_head-", "admin_footer-", "load-",
    "manage_", "wp_ajax_", "wp_ajax_nopriv_",
)


@dataclass(frozen=True)
class ScanConfig:
    max_files: int = MAX_FILES
    max_file_size: int = MAX_FILE_SIZE
    excluded_dirs: Tuple[str, ...] = EXCLUDED_DIRS
    file_extensions: Tuple[str, ...] = (".php",)
    target_calls: Mapping[str, CallCategory] = field(default_factory=lambda: DEFAULT_TARGET_CALLS)
    tool_verbs: Tuple[str, ...] = TOOL_VERBS
    resource_verbs: Tuple[str, ...] = RESOURCE_VERBS
    infrastructure_suffixes: Tuple[str, ...] = INFRASTRUCTURE_SUFFIXES
    core_hooks_blocklist: Tuple[str, ...] = CORE_HOOKS_BLOCKLIST
    internal_prefixes: Tuple[str, ...] = INTERNAL_PREFIXES
    strict_parse: bool = True
    respect_gitignore: bool = False
    show_progress: bool = False

    def replace(self, **overrides):
        return dataclasses.replace(self, **_coerce(overrides))


def _coerce(values):
    known = {f.name: f for f in dataclasses.fields(ScanConfig)}
    out = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown config key: {key}")
        if key == "target_calls":
            if not isinstance(value, Mapping):
                raise ConfigError("target_calls must be a table of name = category")
            try:
                value = build_call_table(value)
            except ValueError as e:
                raise ConfigError(f"Invalid call category in target_calls: {e}") from e
        elif key in ("max_files", "max_file_size"):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{key} must be a non-negative integer")
        elif key in ("strict_parse", "respect_gitignore", "show_progress"):
            if not isinstance(value, bool):
                raise ConfigError(f"{key} must be a boolean")
        else:
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ConfigError(f"{key} must be a list of strings")
            value = tuple(str(v) for v in value)
        out[key] = value
    return out


def load_config(path, base: ScanConfig = None) -> ScanConfig:
    """Load scan settings from the ``[scan]`` table of a TOML file.

    Keys not present in the file keep the values of ``base`` (the defaults
    when no base is given).
    """
    base = base or ScanConfig()
    try:
        with open(path, "rb") as f:
            parsed = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = parsed.get("scan", {})
    if not isinstance(section, dict):
        raise ConfigError("[scan] must be a table")
    return base.replace(**section)
