"""CLI entry point for feature-toggle."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from feature_toggle import __version__
from feature_toggle.cache import FeatureFlagCache
from feature_toggle.config import AppConfig, build_provider, load_config
from feature_toggle.monitoring.logging import setup_logging
from feature_toggle.providers.backend import BackendFlagClient
from feature_toggle.providers.provider import FlagProvider
from feature_toggle.toggle import FeatureToggle, ToggleStatus

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"feature-toggle {__version__}")
        raise typer.Exit()


app = typer.Typer(name="feature-toggle", help="Feature Toggle: cached feature flag checks")


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version and exit", callback=_version_callback, is_eager=True)
    ] = False,
) -> None:
    """Feature Toggle: cached feature flag checks."""


DEFAULT_CONFIG = Path("config.yaml")

ConfigOption = Annotated[Path, typer.Option("--config", "-c", help="Path to config.yaml")]
FlagArgument = Annotated[str | None, typer.Argument(help="Flag name (defaults to flag_name from config)")]
TimesOption = Annotated[
    int, typer.Option("--times", "-n", min=1, help="Repeat the check within this run; later checks may hit the cache")
]


def _load_config(config_path: Path) -> AppConfig:
    """Load config from file, warning if the file does not exist."""
    if config_path.exists():
        return load_config(config_path)
    logger.warning("Config file %s not found, using defaults", config_path)
    return AppConfig()


def _build_toggle(cfg: AppConfig, provider: FlagProvider) -> FeatureToggle:
    """Wire a FeatureToggle from config."""
    return FeatureToggle(
        cache=FeatureFlagCache(ttl=cfg.cache.ttl_seconds),
        provider=provider,
        backend=BackendFlagClient(cfg.backend.url, timeout=cfg.backend.timeout),
    )


def _echo_status(status: ToggleStatus) -> None:
    suffix = " (cached)" if status.cached else ""
    typer.echo(f"{status.text}{suffix}")


def _close_provider(provider: FlagProvider) -> None:
    close = getattr(provider, "close", None)
    if close is not None:
        close()


@app.command()
def check(
    flag: FlagArgument = None,
    config: ConfigOption = DEFAULT_CONFIG,
    times: TimesOption = 1,
) -> None:
    """Check a flag with the local provider.

    The cache lives only for this run, so use ``--times`` to see cached answers.
    """
    cfg = _load_config(config)
    setup_logging(cfg.monitoring)
    provider = build_provider(cfg)
    try:
        toggle = _build_toggle(cfg, provider)
        for _ in range(times):
            _echo_status(toggle.check_frontend(flag or cfg.flag_name))
    finally:
        _close_provider(provider)


@app.command("check-backend")
def check_backend(
    flag: FlagArgument = None,
    config: ConfigOption = DEFAULT_CONFIG,
    times: TimesOption = 1,
) -> None:
    """Check a flag through the backend feature-check endpoint.

    Each run starts with an empty cache; ``--times`` repeats the check in one run.
    """
    cfg = _load_config(config)
    setup_logging(cfg.monitoring)
    provider = build_provider(cfg)
    try:
        toggle = _build_toggle(cfg, provider)
        statuses = asyncio.run(_check_backend_repeatedly(toggle, flag or cfg.flag_name, times))
    finally:
        _close_provider(provider)
    for status in statuses:
        _echo_status(status)
    if not all(s.ok for s in statuses):
        raise typer.Exit(code=1)


async def _check_backend_repeatedly(toggle: FeatureToggle, flag_name: str, times: int) -> list[ToggleStatus]:
    return [await toggle.check_backend(flag_name) for _ in range(times)]


@app.command()
def serve(
    config: ConfigOption = DEFAULT_CONFIG,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Port")] = None,
) -> None:
    """Start the backend feature-check server."""
    cfg = _load_config(config)
    setup_logging(cfg.monitoring)

    # Fall back to config values when CLI flags are not provided
    resolved_host = host if host is not None else cfg.server.host
    resolved_port = port if port is not None else cfg.server.port

    from feature_toggle.server import create_app  # noqa: PLC0415

    provider = build_provider(cfg)
    try:
        import uvicorn  # noqa: PLC0415

        fastapi_app = create_app(
            FeatureFlagCache(ttl=cfg.cache.ttl_seconds),
            provider,
            flag_name=cfg.flag_name,
            cors_origins=cfg.server.cors_origins,
        )
        typer.echo(f"Feature check server starting on http://{resolved_host}:{resolved_port}")
        uvicorn.run(fastapi_app, host=resolved_host, port=resolved_port, log_level="info")
    except ImportError:
        typer.echo("Server requires optional dependencies: pip install feature-toggle[server]")
        raise typer.Exit(code=1)
    finally:
        _close_provider(provider)
