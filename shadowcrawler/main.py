"""
Point d'entrée CLI de ShadowCrawler.

Configure le logging selon les options de verbosité et monte les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    check,
    clear,
    crawl,
    folders,
    list_videos,
    search,
    stats,
)
from .config import Settings
from .logging_config import configure_logging, resolve_log_level

app = typer.Typer(
    name="shadowcrawler",
    help="Catalogue de vidéothèque personnelle",
)

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """ShadowCrawler - Indexation et consultation de vidéothèque."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose

    settings = Settings()
    configure_logging(
        log_level=resolve_log_level(settings.log_level, state["verbose"], state["quiet"]),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Monter les commandes depuis commands.py
app.command()(crawl)
# Note: "list" masque le builtin Python, donc on utilise name= explicitement
app.command(name="list")(list_videos)
app.command()(folders)
app.command()(search)
app.command()(stats)
app.command()(clear)
app.command()(check)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration ShadowCrawler")
    typer.echo(f"Données : {config.data_dir}")
    typer.echo(f"Base de données : {config.resolved_database_url}")
    typer.echo(f"Miniatures : {config.resolved_thumbnails_dir}")
    typer.echo(f"Cache : {config.resolved_cache_dir}")
    typer.echo(f"Couloirs d'indexation : {config.lane_count}")
    typer.echo(f"ffprobe : {config.ffprobe_path}")
    typer.echo(f"ffmpeg : {config.ffmpeg_path}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"ShadowCrawler v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
