"""Render routing definitions as URL query suffixes."""

from urllib.parse import urlencode

from docsearch.domain.entities.routing import RoutingDefinition


def render_routing(routing: RoutingDefinition | None) -> str:
    """Return `?parent=<p>&routing=<r>` (each part only when set), or "" when absent."""
    if routing is None or routing.is_empty:
        return ""
    params: list[tuple[str, str]] = []
    if routing.parent_id is not None:
        params.append(("parent", str(routing.parent_id)))
    if routing.routing_id is not None:
        params.append(("routing", str(routing.routing_id)))
    return f"?{urlencode(params)}"
