import json
import os
from typing import Any, List

from tfimporter.models.resource import TerraformResourceElement

_INDENT = "  "


def _format_value(value: Any, depth: int) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v, depth) for v in value) + "]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = _INDENT * (depth + 1)
        lines = [
            f"{inner}{json.dumps(str(k))} = {_format_value(v, depth + 1)}"
            for k, v in value.items()
        ]
        return "{\n" + "\n".join(lines) + "\n" + _INDENT * depth + "}"
    raise TypeError(f"Cannot render value of type {type(value).__name__} as HCL")


def to_tf_format(resource: TerraformResourceElement) -> str:
    """Renders a single resource block as HCL."""
    lines: List[str] = [
        f'resource "{resource.resource_type}" "{resource.resource_id}" {{'
    ]
    for key, value in resource.attributes.items():
        # Unset optional attributes are left for terraform to default
        if value is None:
            continue
        lines.append(f"{_INDENT}{key} = {_format_value(value, 1)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_resource(resource: TerraformResourceElement, output_dir: str) -> str:
    """Writes the resource to `<output_dir>/<type>.<id>.tf` and returns the path.

    Raises FileExistsError rather than overwriting a file that is already there.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, resource.filename)
    with open(path, "x") as f:
        f.write(to_tf_format(resource))
    return path
