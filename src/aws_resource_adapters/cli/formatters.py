"""
CLI formatting functions.

Records and sweep results are rendered as JSON, YAML or an ASCII table.
"""
import json
from typing import Any, Dict, List

import yaml

FORMATS = ("json", "yaml", "table")


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return format_rows(data)
    elif isinstance(data, dict) and all(isinstance(v, list) for v in data.values()):
        # Sweep results: type name -> identifiers
        rows = [{"type": type_name, "identifier": identifier}
                for type_name, identifiers in data.items() for identifier in identifiers]
        return format_rows(rows, ["type", "identifier"])
    elif isinstance(data, dict):
        rows = [{"attribute": key, "value": _cell(value)} for key, value in data.items()]
        return format_rows(rows, ["attribute", "value"])
    return json.dumps(data, indent=2, default=str)


def format_rows(rows: List[Dict[str, Any]], headers: List[str] = None) -> str:
    if headers is None:
        headers = []
        for row in rows:
            headers.extend(key for key in row if key not in headers)
    table = [[_cell(row.get(h)) for h in headers] for row in rows]
    return _format_table_with_headers(headers, table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def _format_table_with_headers(headers: List[str], rows: List[List[str]]) -> str:
    """Format data as ASCII table with headers."""
    if not rows:
        return "No data to display."

    all_rows = [headers] + rows
    widths = [max(len(str(row[i])) for row in all_rows) for i in range(len(headers))]

    def format_row(row):
        return "| " + " | ".join(str(row[i]).ljust(widths[i]) for i in range(len(row))) + " |"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    lines = [separator, format_row(headers), separator]
    lines.extend(format_row(row) for row in rows)
    lines.append(separator)
    return "\n".join(lines)
