"""Human-friendly output formatter - converts projects and deltas to readable text."""

import os
from typing import List, Optional
from ..contracts.resource import PartialResource, Project
from ..delta.render import format_delta_tree
from ..delta.tree import DeltaTree
from ..ingest.models import ResourceChange


def _use_ascii(ascii_mode: Optional[bool] = None) -> bool:
    """Resolve whether to use ASCII output (checked at format time)."""
    if ascii_mode is not None:
        return bool(ascii_mode)
    return os.environ.get("ARMWHATIF_ASCII", "").lower() in ("1", "true", "yes")


def _section(title: str, width: int = 78, ascii_mode: bool = False) -> List[str]:
    """Return section divider."""
    h = ("-" if ascii_mode else "─") * width
    return [h, title, h]


def _status(partial: PartialResource) -> str:
    if partial.core_resource is not None:
        return "core"
    resource = partial.resource
    if resource is None:
        return ""
    if resource.no_price:
        return "free"
    if resource.is_skipped:
        return "skipped"
    return f"{len(resource.cost_components)} cost component(s)"


def _resource_rows(resources: List[PartialResource]) -> List[str]:
    if not resources:
        return ["  (none)"]

    name_width = min(max(len(p.name) for p in resources), 60)
    type_width = min(max(len(p.resource_type) for p in resources), 45)
    lines = []
    for partial in resources:
        line = f"  {partial.name:<{name_width}}  {partial.resource_type:<{type_width}}  {_status(partial)}"
        if partial.is_skipped and partial.skip_message:
            line += f" ({partial.skip_message})"
        lines.append(line.rstrip())
    return lines


def format_breakdown(project: Project, ascii_mode: Optional[bool] = None) -> str:
    """Render current and prior resources with a closing summary."""
    ascii_mode = _use_ascii(ascii_mode)
    summary = project.summary()
    lines = [
        f"Project: {project.name}",
        f"Source:  {project.metadata.type_display or project.metadata.type} ({project.metadata.path})",
        "",
    ]

    lines.extend(_section("Resources after deployment", ascii_mode=ascii_mode))
    lines.extend(_resource_rows(project.partial_resources))
    lines.append("")
    lines.extend(_section("Resources before deployment", ascii_mode=ascii_mode))
    lines.extend(_resource_rows(project.partial_past_resources))
    lines.append("")

    current = summary["resources"]
    lines.append(
        f"{current['total']} resources: {current['supported']} supported, "
        f"{current['free']} free, {current['unsupported']} not supported"
    )
    return "\n".join(lines)


def format_changes_delta(changes: List[ResourceChange], ascii_mode: Optional[bool] = None) -> str:
    """Render each change's property delta tree, depth-first."""
    ascii_mode = _use_ascii(ascii_mode)
    lines: List[str] = []
    for change in changes:
        change_type = getattr(change.change_type, "value", change.change_type)
        lines.extend(_section(f"{change_type}: {change.resource_id}", ascii_mode=ascii_mode))
        if change.unsupported_reason:
            lines.append(f"  Unsupported: {change.unsupported_reason}")
        tree = DeltaTree.from_changes(change.delta)
        if len(tree) == 0:
            lines.append("  (no property changes)")
        else:
            lines.extend(f"  {line}" for line in format_delta_tree(tree))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
