from __future__ import annotations

import logging

from .model import RobotsGroup, RobotsPolicy, RobotsRule

log = logging.getLogger(__name__)


def _split_line(raw: str) -> tuple[str, str] | None:
    line = raw.split("#", 1)[0].strip()
    if not line:
        return None
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key.strip().lower(), value.strip()


def parse_robots(text: str) -> RobotsPolicy:
    """Parse a robots.txt body. Unparseable lines are skipped, never raised."""
    policy = RobotsPolicy()
    current: RobotsGroup | None = None
    collecting_agents = False

    for line_no, raw in enumerate(text.splitlines(), start=1):
        parsed = _split_line(raw)
        if parsed is None:
            continue
        key, value = parsed

        if key == "user-agent":
            if current is None or not collecting_agents:
                current = RobotsGroup()
                policy.groups.append(current)
            current.agents.append(value.split("/", 1)[0].strip().lower())
            collecting_agents = True
            continue

        if key in {"allow", "disallow"}:
            collecting_agents = False
            if current is None:
                log.debug("robots line %d: rule outside a user-agent group", line_no)
                continue
            if not value:
                continue
            current.rules.append(RobotsRule(allow=key == "allow", pattern=value, line_no=line_no))
            continue

        if key == "crawl-delay":
            collecting_agents = False
            if current is None:
                continue
            try:
                current.crawl_delay = float(value)
            except ValueError:
                log.debug("robots line %d: bad crawl-delay %r", line_no, value)
            continue

        if key == "sitemap":
            policy.sitemaps.append(value)
            continue

        log.debug("robots line %d: ignoring field %r", line_no, key)

    return policy
