import inspect
import logging
import os
import tomllib
from functools import wraps
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

logger = logging.getLogger(__name__)

DESCRIPTIONS_PATH = os.path.join(os.path.dirname(__file__), "tool_descriptions.toml")

with open(DESCRIPTIONS_PATH, "rb") as f:
    parsed_data = tomllib.load(f)


def auto_mcp_tool(mcp: FastMCP, tool_key: str):
    """Register the decorated function as the MCP tool ``tool_key``.

    Every other key of the tool's table in tool_descriptions.toml must name a
    parameter of the function and becomes that parameter's description.
    """
    tool_data = parsed_data[tool_key]

    def decorator(func):
        target = inspect.unwrap(func)
        params = inspect.signature(target).parameters
        unknown = sorted(k for k in tool_data if k != "description" and k not in params)
        if unknown:
            raise ValueError(f"Descriptions for unknown parameters of tool {tool_key}: {', '.join(unknown)}")

        annotations = dict(target.__annotations__)
        for name in params:
            if name in tool_data:
                annotations[name] = Annotated[annotations.get(name, str), Field(description=tool_data[name])]

        # safe_error's wrapper shares the signature of the function it wraps
        target.__annotations__ = annotations
        func.__annotations__ = annotations
        return mcp.tool(name=tool_key, description=tool_data["description"])(func)

    return decorator


def safe_error(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.exception("Tool %s failed", func.__name__)
            return {"status": "failure", "message": str(e)}

    return wrapper
