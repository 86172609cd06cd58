# run_extraction.py
"""
Command-line runner for one extraction:

    python run_extraction.py --url https://boards.example.com/acme/jobs/42
    python run_extraction.py --text "Senior Engineer at Acme Corp, Remote. ..."
    python run_extraction.py --text-file posting.txt --profile ats_boards

Prints the draft record as JSON, or the error message (exit code 1).
The fetch proxy must be reachable at PROXY_BASE_URL for --url.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from core.config import settings
from core.exceptions import PipelineError
from models.extraction import ExtractionInput
from services.extraction.config_loader import ProfileNotFoundError, list_available_profiles
from services.extraction.pipeline import ExtractionPipeline, PipelineConfig

app = typer.Typer(help="Extract job details from a posting URL or pasted text")


async def _run(payload: ExtractionInput, config: PipelineConfig):
    async with ExtractionPipeline(config) as pipeline:
        return await pipeline.run(payload)


@app.command()
def extract(
    url: str = typer.Option("", "--url", help="Job posting URL (takes precedence over text)"),
    text: str = typer.Option("", "--text", help="Pasted job description"),
    text_file: Optional[Path] = typer.Option(
        None, "--text-file", exists=True, dir_okay=False, help="Read the job description from a file"
    ),
    profile: str = typer.Option(settings.EXTRACTION_PROFILE, "--profile", help="Extraction profile name"),
):
    if text_file is not None:
        text = text_file.read_text(encoding="utf-8")

    try:
        config = PipelineConfig.from_settings(settings, profile_name=profile)
    except ProfileNotFoundError as exc:
        typer.echo(f"{exc.args[0]} Available: {', '.join(list_available_profiles())}", err=True)
        raise typer.Exit(code=2)

    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; the extraction call will be rejected")

    try:
        draft = asyncio.run(_run(ExtractionInput(url=url, pasted_text=text), config))
    except PipelineError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(draft.to_dict(), indent=2))


if __name__ == "__main__":
    app()
