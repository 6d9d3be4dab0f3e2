from __future__ import annotations

from collections import Counter

from .ledger import AuditLedger


def render_markdown_report(ledger: AuditLedger, limit: int = 500) -> str:
    events = ledger.tail(limit)
    if not events:
        return "# Upsound MCP Dispatch Report\n\nNo events found."

    decisions = Counter(event.get("decision", "UNKNOWN") for event in events)
    tools = Counter(event.get("tool", "unknown") for event in events)
    blocked_by = Counter(event.get("rule_id", "-") for event in events if event.get("decision") == "BLOCK")

    lines = [
        "# Upsound MCP Dispatch Report",
        "",
        "## Summary",
        f"- Events: {len(events)}",
        f"- ALLOW: {decisions.get('ALLOW', 0)}",
        f"- BLOCK: {decisions.get('BLOCK', 0)}",
        f"- ERROR: {decisions.get('ERROR', 0)}",
        "",
        "## Tool Usage",
    ]
    for tool, count in tools.most_common():
        lines.append(f"- {tool}: {count}")

    if blocked_by:
        lines.append("")
        lines.append("## Blocking Rules")
        for rule_id, count in blocked_by.most_common():
            lines.append(f"- {rule_id}: {count}")

    lines.append("")
    lines.append("## Recent Events")
    for event in events[-20:]:
        rid = event.get("request_id", "-")
        tool = event.get("tool", "unknown")
        decision = event.get("decision", "UNKNOWN")
        url = event.get("url", "")
        reason = event.get("reason", "")
        lines.append(f"- `{rid}` `{tool}` `{decision}` {url}: {reason}")

    return "\n".join(lines)
