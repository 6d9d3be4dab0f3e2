from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RobotsRule:
    allow: bool
    pattern: str
    line_no: int = 0

    @property
    def rule_id(self) -> str:
        return f"robots_{'allow' if self.allow else 'disallow'}_L{self.line_no}"


@dataclass(slots=True)
class RobotsGroup:
    agents: list[str] = field(default_factory=list)
    rules: list[RobotsRule] = field(default_factory=list)
    crawl_delay: float | None = None


@dataclass(slots=True)
class RobotsPolicy:
    groups: list[RobotsGroup] = field(default_factory=list)
    sitemaps: list[str] = field(default_factory=list)

    def groups_for(self, agent_token: str) -> list[RobotsGroup]:
        """Groups that apply to ``agent_token``: its own groups, else the ``*`` groups."""
        product = agent_token.split("/", 1)[0].strip().lower()
        own = [group for group in self.groups if product and product in group.agents]
        if own:
            return own
        return [group for group in self.groups if "*" in group.agents]
