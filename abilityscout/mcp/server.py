import os

from fastmcp import FastMCP

from abilityscout.export.drafts import generate_multiple_stubs
from abilityscout.export.report import export, filter_by_confidence
from abilityscout.mcp.helper import auto_mcp_tool, parsed_data, safe_error
from abilityscout.scanner import Scanner
from abilityscout.utils.plugin_header import read_plugin_info

mcp = FastMCP(
    "Abilities Scout MCP", instructions=parsed_data["tool_description"]["instructions"]
)


def _validate_plugin_dir(plugin_dir):
    real_dir = os.path.realpath(plugin_dir)
    if not os.path.isdir(real_dir):
        raise ValueError(f"Plugin directory not found: {plugin_dir}")
    return real_dir


def execute_scan(plugin_dir: str, confidence: str = "low"):
    plugin_dir = _validate_plugin_dir(plugin_dir)
    result = Scanner().scan(plugin_dir)
    abilities = filter_by_confidence(result.potential_abilities, confidence)
    result.stats.potential_abilities_count = len(abilities)
    return {
        "plugin_info": read_plugin_info(plugin_dir),
        "potential_abilities": [a.to_dict() for a in abilities],
        "stats": result.stats.to_dict(),
    }


def execute_export(plugin_dir: str, format: str = "json"):
    plugin_dir = _validate_plugin_dir(plugin_dir)
    result = Scanner().scan(plugin_dir)
    return {
        "content": export(result, format, read_plugin_info(plugin_dir)),
        "format": format,
    }


def execute_draft(plugin_dir: str, confidence: str = "high"):
    plugin_dir = _validate_plugin_dir(plugin_dir)
    result = Scanner().scan(plugin_dir)
    return generate_multiple_stubs(result, confidence)


@auto_mcp_tool(mcp, "scan")
@safe_error
def mcp_scan(plugin_dir: str, confidence: str = "low"):
    return execute_scan(plugin_dir, confidence)


@auto_mcp_tool(mcp, "export")
@safe_error
def mcp_export(plugin_dir: str, format: str = "json"):
    return execute_export(plugin_dir, format)


@auto_mcp_tool(mcp, "draft")
@safe_error
def mcp_draft(plugin_dir: str, confidence: str = "high"):
    return execute_draft(plugin_dir, confidence)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
