from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console

from upsound_mcp.audit.ledger import AuditLedger
from upsound_mcp.audit.render import render_markdown_report
from upsound_mcp.config.load import ConfigError, load_config
from upsound_mcp.config.model import ServerConfig
from upsound_mcp.dispatch.dispatcher import RequestDispatcher, UnknownOperation
from upsound_mcp.logging_setup import configure_logging, stderr_console
from upsound_mcp.tools.catalog import list_operations
from upsound_mcp.transport.mcp_server import serve_stdio

app = typer.Typer(help="Upsound MCP server")
audit_app = typer.Typer(help="Audit commands")
app.add_typer(audit_app, name="audit")
console = Console()
log = logging.getLogger("upsound_mcp")


def _load(config_path: str, ignore_robots_txt: bool) -> ServerConfig:
    try:
        return load_config(config_path or None, ignore_robots_txt=ignore_robots_txt)
    except ConfigError as exc:
        stderr_console.print(f"[red]ERROR[/red] invalid config: {exc}")
        raise typer.Exit(2)


def _ledger(config: ServerConfig) -> AuditLedger | None:
    return AuditLedger(config.audit_dir) if config.audit_dir else None


def parse_cli_arguments(pairs: list[str]) -> dict[str, object]:
    out: dict[str, object] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--arg")
        try:
            value: object = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        out[key.strip()] = value
    return out


@app.command("serve")
def serve(
    ignore_robots_txt: bool = typer.Option(False, "--ignore-robots-txt", help="Do not enforce the catalog's robots.txt"),
    config: str = typer.Option("", "--config", help="Path to config YAML"),
) -> None:
    cfg = _load(config, ignore_robots_txt)
    configure_logging(cfg.log_level)
    log.info("Server started with options: %s", "respect-robots-txt" if cfg.respect_robots_txt else "ignore-robots-txt")

    dispatcher = RequestDispatcher(cfg, ledger=_ledger(cfg))
    try:
        asyncio.run(serve_stdio(dispatcher))
    except KeyboardInterrupt:
        log.info("shutting down")
    except Exception:
        log.exception("Fatal error running server")
        raise typer.Exit(1)


@app.command("tools")
def tools() -> None:
    console.print_json(data={"tools": [op.to_dict() for op in list_operations()]})


@app.command("call")
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. upsound_search_studios"),
    arg: list[str] = typer.Option(None, "--arg", "-a", help="Tool argument as key=value; JSON values are decoded"),
    ignore_robots_txt: bool = typer.Option(False, "--ignore-robots-txt"),
    config: str = typer.Option("", "--config", help="Path to config YAML"),
) -> None:
    cfg = _load(config, ignore_robots_txt)
    configure_logging(cfg.log_level)
    arguments = parse_cli_arguments(arg or [])

    dispatcher = RequestDispatcher(cfg, ledger=_ledger(cfg))
    try:
        envelope = asyncio.run(dispatcher.dispatch(name, arguments))
    except UnknownOperation as exc:
        console.print(f"[red]ERROR[/red] {exc}")
        raise typer.Exit(2)

    console.print_json(data={"isError": envelope.is_error, "payload": envelope.payload})
    if envelope.is_error:
        raise typer.Exit(1)


@audit_app.command("tail")
def audit_tail(
    lines: int = typer.Option(20, "--lines"),
    tool: str = typer.Option("", "--tool"),
    audit_dir: str = typer.Option("audit", "--audit-dir"),
) -> None:
    ledger = AuditLedger(audit_dir)
    for event in ledger.tail(lines, tool=tool or None):
        console.print_json(data=event)


@audit_app.command("report")
def audit_report(
    output: str = typer.Option("audit/report.md", "--output"),
    audit_dir: str = typer.Option("audit", "--audit-dir"),
) -> None:
    report = render_markdown_report(AuditLedger(audit_dir))
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report, encoding="utf-8")
    console.print(f"wrote {output_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
