"""
Command-line interface for the credibility checker.

Uses Typer to expose the three operations (extract, evaluate, check) as
commands that print the same JSON bodies the API handlers return.
Supports loading .env files for API key configuration.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv
from rich.console import Console

from . import api
from .config import AppConfig, load_config
from .llm.providers.factory import create_provider
from .llm.tracing import flush, setup_langfuse
from .service import CredibilityService
from .utils.logging import setup_llm_logger, setup_logging

app = typer.Typer(add_completion=False, help="Assess the credibility of news articles.")
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")
LogDirOption = typer.Option(None, "--log-dir", help="Directory for file and LLM logs.")
ApiKeyOption = typer.Option(
    None,
    "--api-key",
    help="Override provider API key (or set OPENAI_API_KEY / GOOGLE_API_KEY / .env).",
)


@app.command()
def extract(
    url: str = typer.Argument(..., help="Article URL."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
    log_dir: Path | None = LogDirOption,
):
    """Fetch a URL and print the extracted article text."""
    cfg = _load(config, log_level, None)
    setup_logging(cfg.logging, log_dir)
    service = CredibilityService(cfg, provider=None)
    _emit(asyncio.run(api.handle_extract(service, {"url": url})))


@app.command()
def evaluate(
    content: str | None = typer.Option(None, "--content", help="Article text to assess."),
    file: Path | None = typer.Option(
        None, "--file", "-f", exists=True, readable=True, help="Read article text from a file."
    ),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
    log_dir: Path | None = LogDirOption,
    api_key: str | None = ApiKeyOption,
):
    """Run the quick assessment on article text."""
    if file is not None:
        content = file.read_text(encoding="utf-8")
    cfg = _load(config, log_level, api_key)
    service = _build_service(cfg, log_dir)
    _emit(asyncio.run(api.handle_evaluate(service, {"content": content})))


@app.command()
def check(
    url: str = typer.Argument(..., help="Article URL."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
    log_dir: Path | None = LogDirOption,
    api_key: str | None = ApiKeyOption,
):
    """Fetch, extract and fully assess an article."""
    cfg = _load(config, log_level, api_key)
    service = _build_service(cfg, log_dir)
    _emit(asyncio.run(api.handle_check(service, {"url": url})))


def _load(config: Path | None, log_level: str | None, api_key: str | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if api_key:
        cfg.provider.api_key = api_key
    return cfg


def _build_service(cfg: AppConfig, log_dir: Path | None) -> CredibilityService:
    logger = setup_logging(cfg.logging, log_dir)
    llm_logger = setup_llm_logger(cfg.logging, log_dir)
    setup_langfuse(cfg.langfuse)
    try:
        provider = create_provider(cfg.provider, cfg.logging, llm_logger)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    return CredibilityService(cfg, provider, logger=logger)


def _emit(response: tuple[int, dict[str, Any]]) -> None:
    status, body = response
    console.print_json(data=body)
    flush()
    if status >= 400:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
