from __future__ import annotations

import json
import logging

import typer
from dotenv import load_dotenv

from mediafetch.config import ServiceConfig
from mediafetch.runner import lookup_sync

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2

app = typer.Typer(add_completion=False, help="Twitter/X media link lookup")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def exit_code_for(status_code: int) -> int:
    if status_code < 400:
        return EXIT_OK
    if status_code < 500:
        return EXIT_NOT_FOUND
    return EXIT_ERROR


@app.command()
def lookup(
    reference: str = typer.Argument(..., help="Status URL or numeric status id"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Resolve one status and print the JSON payload."""
    load_dotenv()
    _setup_logging(log_level)

    status_code, payload = lookup_sync(reference, ServiceConfig.from_env())
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    raise typer.Exit(code=exit_code_for(status_code))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the HTTP API."""
    load_dotenv()
    _setup_logging(log_level)

    import uvicorn

    from mediafetch.server import create_app

    uvicorn.run(create_app(ServiceConfig.from_env()), host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    app()
