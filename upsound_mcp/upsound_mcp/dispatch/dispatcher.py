from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from upsound_mcp.audit.ledger import AuditLedger
from upsound_mcp.config.model import ServerConfig
from upsound_mcp.policy.cache import RobotsPolicyCache
from upsound_mcp.tools.catalog import ToolBinding, get_binding
from upsound_mcp.tools.envelope import ResultEnvelope
from upsound_mcp.tools.mapping import InvalidArguments
from upsound_mcp.upstream.client import TransportError, UpstreamClient

log = logging.getLogger(__name__)

ROBOTS_DENIED_MESSAGE = (
    "This path is disallowed by Upsound's robots.txt to this User-agent. "
    "You may or may not want to run the server with '--ignore-robots-txt' args"
)


class UnknownOperation(LookupError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class CatalogClient(Protocol):
    async def fetch_text(self, url: str) -> str: ...

    async def fetch_json(self, url: str) -> Any: ...


@dataclass(slots=True)
class DispatchOutcome:
    envelope: ResultEnvelope
    decision: str
    reason: str
    rule_id: str
    url: str = ""


def _ignore_robots_flag(args: dict) -> bool:
    value = args.pop("ignoreRobotsText", False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidArguments("ignoreRobotsText must be a boolean")
    return value


class RequestDispatcher:
    """Runs one tool invocation: map arguments, check robots.txt, call the catalog.

    Every runtime outcome comes back as a ``ResultEnvelope``; only an unknown
    tool name raises (``UnknownOperation``).
    """

    def __init__(
        self,
        config: ServerConfig,
        client: CatalogClient | None = None,
        policy_cache: RobotsPolicyCache | None = None,
        ledger: AuditLedger | None = None,
    ):
        self.config = config
        self.client = client if client is not None else UpstreamClient(config)
        self.policy_cache = policy_cache or RobotsPolicyCache(
            self.client,
            config.robots_url,
            enforcing=config.respect_robots_txt,
        )
        self.ledger = ledger

    async def dispatch(self, name: str, arguments: dict | None = None) -> ResultEnvelope:
        binding = get_binding(name)
        if binding is None:
            raise UnknownOperation(name)

        args = dict(arguments or {})
        outcome = await self._run(binding, args)
        if self.ledger is not None:
            try:
                self.ledger.write_event(build_audit_event(outcome, name, args, self.ledger.new_request_id()))
            except OSError as exc:
                log.warning("could not write audit event for %s: %s", name, exc)
        return outcome.envelope

    async def _run(self, binding: ToolBinding, args: dict) -> DispatchOutcome:
        try:
            ignore_robots = _ignore_robots_flag(args)
            request = binding.build_request(args)
        except InvalidArguments as exc:
            return DispatchOutcome(ResultEnvelope.error({"error": str(exc)}), "ERROR", str(exc), "invalid_arguments")

        url = request.url(self.config.base_url)

        if not ignore_robots and self.policy_cache.enforcing:
            await self.policy_cache.ensure_loaded()
            decision = self.policy_cache.evaluate(request.policy_path(self.config.base_url), self.config.user_agent)
            if not decision.allowed:
                log.info("%s blocked by robots.txt: %s (%s)", binding.operation.name, url, decision.reason)
                return DispatchOutcome(
                    ResultEnvelope.error({"error": ROBOTS_DENIED_MESSAGE, "url": url}),
                    "BLOCK",
                    decision.reason,
                    decision.rule_id,
                    url,
                )
            reason, rule_id = decision.reason, decision.rule_id
        elif ignore_robots:
            reason, rule_id = "robots.txt bypassed for this call", "robots_bypass_call"
        else:
            reason, rule_id = "robots.txt enforcement disabled", "robots_bypass_process"

        try:
            body = await self.client.fetch_json(url)
        except TransportError as exc:
            log.warning("%s upstream request failed: %s", binding.operation.name, exc)
            return DispatchOutcome(
                ResultEnvelope.error({"error": str(exc), binding.url_key: url}),
                "ERROR",
                str(exc),
                "upstream_transport_error",
                url,
            )

        return DispatchOutcome(ResultEnvelope.ok({binding.url_key: url, binding.data_key: body}), "ALLOW", reason, rule_id, url)


def build_audit_event(outcome: DispatchOutcome, tool: str, args: dict, request_id: str) -> dict:
    return {
        "request_id": request_id,
        "tool": tool,
        "args_summary": json.dumps(args, sort_keys=True, default=str),
        "decision": outcome.decision,
        "reason": outcome.reason,
        "rule_id": outcome.rule_id,
        "url": outcome.url,
    }
