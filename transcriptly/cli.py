#!/usr/bin/env python
"""
Command line interface for transcriptly.

Fetch a transcript, clear the local cache, or run the HTTP API.
"""

import asyncio
import json
import logging
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from transcriptly.components.cache.cache import TranscriptCache
from transcriptly.components.sources import FetchConfig
from transcriptly.errors import InvalidInputError, RetrievalFailedError
from transcriptly.models.config import DEFAULT_LANGUAGE
from transcriptly.run import TranscriptRetriever

app = typer.Typer(
    help="transcriptly - Retrieve YouTube transcripts as plain text",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


@app.command(name="get", help="Print the transcript of a YouTube video")
def get_command(
    url: Annotated[str, typer.Argument(help="YouTube video URL or ID")],
    lang: Annotated[
        str, typer.Option(help='Language code for transcript (e.g., "ko", "en")')
    ] = DEFAULT_LANGUAGE,
    proxy_url: Annotated[
        Optional[str],
        typer.Option(envvar="PROXY_URL", help="Proxy for outbound requests"),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the transcript with its metadata")
    ] = False,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
):
    """
    Retrieve a transcript and print it to stdout.

    Exit codes: 0 on success, 2 for an invalid URL or ID, 1 when every
    transcript source failed.
    """
    _setup_logging(verbose)
    retriever = TranscriptRetriever(config=FetchConfig(proxy_url=proxy_url))

    try:
        result = asyncio.run(retriever.retrieve(url, lang))
    except InvalidInputError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    except RetrievalFailedError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        typer.echo(result.text)


@app.command(name="clear-cache", help="Delete every cached transcript")
def clear_cache_command():
    removed = TranscriptCache().clear()
    typer.echo(f"Removed {removed} cached transcript(s)")


@app.command(name="serve", help="Run the HTTP API with uvicorn")
def serve_command(
    host: Annotated[Optional[str], typer.Option(help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port to listen on")] = None,
):
    import uvicorn

    from transcriptly_api.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "transcriptly_api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level,
        reload=settings.debug,
    )


def main():
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
