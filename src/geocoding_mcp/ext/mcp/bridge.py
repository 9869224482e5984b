"""Bridge between BaseTool and MCP tool primitives.

Turns a tool's pydantic params model into the self-contained JSON Schema an
MCP `Tool.inputSchema` expects: `$ref`s inlined, `$defs` and titles dropped,
nullable optionals collapsed to their plain type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from geocoding_mcp.foundation.core import BaseTool

_DROP_KEYS = frozenset({"title", "$defs", "definitions"})
_NULL = {"type": "null"}


def get_tool_schema(tool: BaseTool[BaseModel]) -> dict[str, Any]:
    """JSON Schema for the tool's params, ready for MCP registration."""
    schema = tool.params_schema.model_json_schema()
    return _clean(schema, schema.get("$defs", {}))


def _clean(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, list):
        return [_clean(n, defs) for n in node]
    if not isinstance(node, dict):
        return node

    if (ref := node.get("$ref")) is not None:
        target = defs[ref.rsplit("/", 1)[-1]]
        # Sibling keys (description, default) override the referenced definition
        return _clean({**target, **{k: v for k, v in node.items() if k != "$ref"}}, defs)

    out: dict[str, Any] = {}
    for key, value in node.items():
        if key in _DROP_KEYS:
            continue
        if key == "properties":
            out[key] = {name: _clean(prop, defs) for name, prop in value.items()}
        else:
            out[key] = _clean(value, defs)

    branches = out.get("anyOf")
    if isinstance(branches, list) and len(branches) == 2 and _NULL in branches:
        (inner,) = [b for b in branches if b != _NULL]
        del out["anyOf"]
        if "default" in out and out["default"] is None:
            del out["default"]
        out = {**inner, **out}
    return out
