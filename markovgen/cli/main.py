import json
import logging
from pathlib import Path
from typing import Optional

import typer

from markovgen.analytics.generator import RandomSource
from markovgen.config import settings
from markovgen.core.errors import MarkovError
from markovgen.services import generate_text, get_stats, load_input, save_table


app = typer.Typer(help="Learn a word-level Markov chain from text and generate from it.")


@app.callback()
def main(log_level: str = typer.Option(settings.log_level, help="Logging level")):
    logging.basicConfig(
        level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _load(input_file: str, state_size: int):
    try:
        return load_input(input_file, state_size)
    except (MarkovError, OSError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)


@app.command()
def generate(
    input_file: str = typer.Argument("-", help="Text corpus or saved .bin model; '-' reads stdin"),
    initial_phrase: Optional[str] = typer.Argument(None, help="Phrase to continue from"),
    output_size: int = typer.Option(settings.output_size, "--output-size", "-s", min=0),
    state_size: int = typer.Option(
        settings.state_size, "--state-size", "-t", min=1,
        help="Tokens per state; ignored when loading a saved model",
    ),
    save: bool = typer.Option(
        False, "--save", help="Save the transition table to the default path instead of generating"
    ),
    save_to: Optional[Path] = typer.Option(
        settings.save_path, "--save-to", help="Save the transition table to PATH instead of generating"
    ),
    random_seed: Optional[int] = typer.Option(None, "--random-seed"),
    short_seed: str = typer.Option(settings.short_seed, "--short-seed", help="reject | match"),
):
    table = _load(input_file, state_size)
    if save or save_to is not None:
        path = save_table(table, save_to)
        typer.echo(f"saved {len(table)} states to {path}", err=True)
        return
    try:
        res = generate_text(
            table, initial_phrase, output_size, RandomSource(random_seed), short_seed
        )
    except MarkovError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)
    if res.truncated:
        typer.echo(f"note: stopped after {res.produced} of {res.requested} tokens", err=True)
    typer.echo(res.text)


@app.command()
def stats(
    input_file: str = typer.Argument("-"),
    state_size: int = typer.Option(settings.state_size, "--state-size", "-t", min=1),
):
    typer.echo(json.dumps(get_stats(_load(input_file, state_size)), indent=2))


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn

    uvicorn.run("markovgen.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
