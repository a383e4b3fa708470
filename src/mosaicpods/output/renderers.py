"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from mosaicpods.output.console import create_console, get_output, style_for_field_type

if TYPE_CHECKING:
    from rich.console import Console

    from mosaicpods.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "resolve_image":
        return str(result.data.get("url") or "")
    if result.op == "preview_pod":
        return str(result.data.get("html", ""))

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    """Extract the identifying value from a list item."""
    if isinstance(item, dict):
        for key in ("type", "attachment_key"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="pods.ok")
    op = Text(f"  {result.op}", style="pods.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pods.key")
    if isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    elif key in ("type", "pod_type"):
        v = Text(str(value), style="pods.type")
    elif key in ("source", "template", "directory"):
        v = Text(str(value), style="pods.path")
    elif key == "name":
        v = Text(str(value), style="pods.name")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _field_tree(parent: Tree, descriptors: list[dict[str, Any]]) -> None:
    for desc in descriptors:
        field_type = str(desc.get("type", ""))
        label = Text.assemble(
            (str(desc.get("name", "?")), "bold"),
            " ",
            (field_type, style_for_field_type(field_type)),
        )
        if desc.get("required"):
            label.append(" *", style="pods.warning")
        node = parent.add(label)
        nested = desc.get("item_schema") or desc.get("schema") or {}
        if nested:
            _field_tree(node, list(nested.values()))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pods.error")
    op = Text(f"  {result.op}", style="pods.op")
    console.print(Text.assemble(label, op, " — ", msg))

    if err and err.detail.get("problems"):
        for problem in err.detail["problems"]:
            console.print(Text(f"  - {problem}"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Schema renderers ──────────────────────────────────────────────────


def _render_type_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_pod_types as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Type", style="pods.type", no_wrap=True)
    table.add_column("Name", style="pods.name")
    table.add_column("Category")
    table.add_column("Fields", justify="right")
    for item in items:
        table.add_row(
            str(item.get("type", "")),
            str(item.get("name", "")),
            str(item.get("category") or ""),
            str(item.get("fields", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} pod types")


def _render_type_detail(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render show_pod_type as a field tree."""
    d = result.data
    _status_line(console, result)
    for key in ("type", "name", "category", "description"):
        if d.get(key):
            _field(console, key, d[key])
    tree = Tree(Text("fields", style="pods.key"))
    _field_tree(tree, d.get("fields", []))
    console.print(tree)


# ── Definition renderers ──────────────────────────────────────────────


def _render_definition(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build_definition with the definition as indented JSON."""
    _status_line(console, result)
    for key in ("pod_type", "name"):
        if result.data.get(key):
            _field(console, key, result.data[key])
    console.print(
        _json.dumps(result.data.get("definition", {}), indent=2),
        markup=False,
        emoji=False,
        soft_wrap=True,
    )
    keys = result.data.get("attachment_keys") or []
    if keys and verbose:
        _field(console, "attachment_keys", keys)


def _render_preview(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render preview_pod: the HTML fragment, with the template in verbose mode."""
    if verbose:
        _status_line(console, result)
        _field(console, "template", result.data.get("template") or "<placeholder>")
    console.print(result.data.get("html", ""), markup=False, emoji=False, soft_wrap=True)


def _render_image(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolve_image results."""
    _status_line(console, result)
    for key in ("field", "attachment_key", "variant", "url", "alt_text"):
        if result.data.get(key):
            _field(console, key, result.data[key])


def _render_scaffold(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render scaffold_templates results."""
    _status_line(console, result)
    _field(console, "directory", result.data.get("directory", ""))
    for path in result.data.get("created", []):
        console.print(Text.assemble(("  create", "pods.ok"), f"  {path}"))
    for path in result.data.get("skipped", []):
        console.print(Text.assemble(("  skip", "pods.warning"), f"    {path}"))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Schema
    "list_pod_types": _render_type_table,
    "show_pod_type": _render_type_detail,
    "validate_schemas": _render_generic,
    "reload_schemas": _render_generic,
    # Definitions
    "build_definition": _render_definition,
    "preview_pod": _render_preview,
    "resolve_image": _render_image,
    "scan_attachments": _render_generic,
    # Scaffold
    "scaffold_templates": _render_scaffold,
}
