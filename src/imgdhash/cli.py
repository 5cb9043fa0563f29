from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from .config import Settings
from .distance import hamming_distance, is_similar
from .hash import hash_image_file
from .loader import ImageDecodeError
from .logging import get_logger
from .signature import Signature

logger = get_logger(__name__)

app = typer.Typer(help="imgdhash – difference hash generator", no_args_is_help=True)


def _render(signature: Signature, hex_output: bool) -> str:
    return signature.hex() if hex_output else str(signature)


def _hash_path(path: Path, settings: Settings) -> Signature:
    logger.info(f"Hashing {path}")
    return hash_image_file(path, settings)


@app.command()
def dhash(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image to hash"),
    compare: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, readable=True, help="Second image to compare against"
    ),
    hex_output: Optional[bool] = typer.Option(None, "--hex/--decimal", help="Print hashes as hex or decimal"),
    resample: Optional[str] = typer.Option(None, help="Resize rule: 'nearest' or 'box'"),
    luminance: Optional[str] = typer.Option(None, help="Grayscale rule: 'rec601' or 'mean'"),
    threshold: Optional[int] = typer.Option(None, help="Maximum distance reported as similar"),
) -> None:
    """
    Print the dhash of IMAGE, and with COMPARE also the distance between the two.

    A lower distance means more similar images; 0 is an exact match.
    """
    overrides = {
        key: value
        for key, value in {
            "hex_output": hex_output,
            "resample": resample.lower() if resample else None,
            "luminance": luminance.lower() if luminance else None,
            "similarity_threshold": threshold,
            "report_similarity": True if threshold is not None else None,
        }.items()
        if value is not None
    }
    try:
        settings = replace(Settings.from_env(), **overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        image_hash = _hash_path(image, settings)
        typer.echo(f"dhash for {image} is `{_render(image_hash, settings.hex_output)}`")

        if compare is not None:
            compare_hash = _hash_path(compare, settings)
            typer.echo(f"dhash for {compare} is `{_render(compare_hash, settings.hex_output)}`")
            typer.echo(f"distance is: {hamming_distance(image_hash, compare_hash)}")
            if settings.report_similarity:
                similar = is_similar(image_hash, compare_hash, settings=settings)
                typer.echo(f"similar: {'yes' if similar else 'no'}")

    except ImageDecodeError as exc:
        logger.error(f"Cannot hash image: {exc}")
        raise typer.Exit(code=1) from exc


def main() -> None:
    app()


if __name__ == "__main__":
    main()
