from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import quote, unquote

from .model import RobotsPolicy, RobotsRule

_SAFE_CHARS = "/?=&:@!$'()*+,;~"


@dataclass(slots=True)
class Decision:
    allowed: bool
    reason: str
    rule_id: str


def _normalize(value: str) -> str:
    return quote(unquote(value), safe=_SAFE_CHARS)


@lru_cache(maxsize=512)
def _pattern_regex(pattern: str) -> re.Pattern[str]:
    anchored = pattern.endswith("$")
    body = pattern[:-1] if anchored else pattern
    pieces = [re.escape(_normalize(piece)) for piece in body.split("*")]
    return re.compile(".*".join(pieces) + ("$" if anchored else ""))


def _outranks(candidate: RobotsRule, current: RobotsRule | None) -> bool:
    # Longest pattern wins; Allow wins a tie.
    if current is None:
        return True
    return (len(candidate.pattern), candidate.allow) > (len(current.pattern), current.allow)


def evaluate_robots(policy: RobotsPolicy, path: str, agent_token: str) -> Decision:
    if not path.startswith("/"):
        path = "/" + path
    normalized = _normalize(path)
    if normalized == "/robots.txt":
        return Decision(True, "robots.txt is always fetchable", "robots_self")

    groups = policy.groups_for(agent_token)
    if not groups:
        return Decision(True, "no robots group applies to agent", "robots_no_group")

    best: RobotsRule | None = None
    for group in groups:
        for rule in group.rules:
            if _pattern_regex(rule.pattern).match(normalized) and _outranks(rule, best):
                best = rule

    if best is None:
        return Decision(True, "no robots rule matches path", "robots_no_match")
    if best.allow:
        return Decision(True, f"path allowed by robots rule: Allow: {best.pattern}", best.rule_id)
    return Decision(False, f"path disallowed by robots rule: Disallow: {best.pattern}", best.rule_id)
