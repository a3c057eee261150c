"""
Commandes CLI de ShadowCrawler.

Chaque commande publique est une fonction sync (signature Typer) qui delegue
a une implementation async recevant le container DI.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from shadowcrawler.adapters.cli.helpers import (
    async_command,
    console,
    suppress_loguru,
    with_container,
)
from shadowcrawler.adapters.probing.dependency_checker import DependencyChecker
from shadowcrawler.config import Settings
from shadowcrawler.core.entities.video import VideoRecord
from shadowcrawler.core.exceptions import CrawlRootError, StorageAnalysisError
from shadowcrawler.core.value_objects.catalog import DEFAULT_PAGE_SIZE, SortKey
from shadowcrawler.services.progress import IndexingProgress, StorageProgress
from shadowcrawler.utils.formatting import format_bytes, format_duration


def _format_date(timestamp: int) -> str:
    if not timestamp:
        return "?"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d")


def _videos_table(records: list[VideoRecord], title: Optional[str] = None) -> Table:
    """Construit la table Rich d'une liste d'enregistrements."""
    table = Table(title=title)
    table.add_column("Fichier", style="cyan", no_wrap=True)
    table.add_column("Dossier", no_wrap=True)
    table.add_column("Taille", justify="right")
    table.add_column("Duree", justify="right")
    table.add_column("Resolution")
    table.add_column("Codec")
    table.add_column("Creation")

    for record in records:
        resolution = f"{record.width}x{record.height}" if record.width and record.height else "?"
        table.add_row(
            record.file_name,
            record.folder_name,
            format_bytes(record.file_size),
            format_duration(record.duration),
            resolution,
            record.codec or "?",
            _format_date(record.creation_date),
        )
    return table


def crawl(
    path: Annotated[
        Path,
        typer.Argument(help="Repertoire racine a indexer"),
    ],
    lanes: Annotated[
        Optional[int],
        typer.Option("--lanes", "-l", min=1, help="Nombre de couloirs concurrents (defaut: config)"),
    ] = None,
    sequential: Annotated[
        bool,
        typer.Option("--sequential", help="Indexation sur un seul couloir, en profondeur"),
    ] = False,
) -> None:
    """Indexe les fichiers video d'une arborescence."""
    asyncio.run(_crawl_async(path, lanes, sequential))


@with_container()
async def _crawl_async(container, path: Path, lanes: Optional[int], sequential: bool) -> None:
    """Implementation async de la commande crawl."""
    root = path.expanduser().resolve()
    if not root.is_dir():
        console.print(f"[red]Erreur:[/red] Repertoire introuvable: {root}")
        raise typer.Exit(code=1)

    missing = await container.dependency_checker().missing_dependencies()
    for dep in missing:
        console.print(f"[yellow]Attention:[/yellow] {dep.name} introuvable ({dep.install_instructions})")

    crawler = container.crawler_service()
    channel = container.progress()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Indexation en cours...", total=None)

        def on_progress(event) -> None:
            if isinstance(event, IndexingProgress) and not event.is_complete:
                progress.update(
                    task,
                    description=f"[cyan]{event.indexed_count} indexe(s)[/cyan] {Path(event.current_file).name}",
                )

        unsubscribe = channel.subscribe(on_progress)
        try:
            with suppress_loguru():
                if sequential:
                    count = await crawler.crawl_sequential(root)
                else:
                    count = await crawler.crawl(root, lane_count=lanes)
        except CrawlRootError as e:
            console.print(f"[red]Erreur:[/red] {e}")
            raise typer.Exit(code=1)
        finally:
            unsubscribe()

        progress.update(task, description="[green]Termine")

    console.print(f"\n[bold green]{count}[/bold green] fichier(s) video indexe(s)")


def list_videos(
    sort: Annotated[
        str,
        typer.Option("--sort", "-s", help="Ordre de tri (ex: name_asc, size_desc)"),
    ] = SortKey.CREATION_DATE_DESC.value,
    page: Annotated[
        int,
        typer.Option("--page", "-p", min=1, help="Numero de page"),
    ] = 1,
    page_size: Annotated[
        int,
        typer.Option("--page-size", min=1, help="Nombre d'elements par page"),
    ] = DEFAULT_PAGE_SIZE,
    folder: Annotated[
        Optional[str],
        typer.Option("--folder", "-f", help="Restreindre a un dossier"),
    ] = None,
) -> None:
    """Liste le catalogue, trie et pagine."""
    asyncio.run(_list_async(sort, page, page_size, folder))


@with_container()
async def _list_async(container, sort: str, page: int, page_size: int, folder: Optional[str]) -> None:
    """Implementation async de la commande list."""
    catalog = container.catalog_service()
    result = catalog.list_page(SortKey.parse(sort), page, page_size, folder_name=folder)

    if not result.records:
        console.print("[yellow]Aucune video dans le catalogue.[/yellow]")
        return

    console.print(_videos_table(result.records))
    footer = f"Page {result.page} ({len(result.records)}/{result.total_count})"
    if result.has_more:
        footer += f" - page suivante: --page {result.page + 1}"
    console.print(f"[dim]{footer}[/dim]")


def folders() -> None:
    """Liste les dossiers du catalogue."""
    asyncio.run(_folders_async())


@with_container()
async def _folders_async(container) -> None:
    names = container.catalog_service().folders()
    if not names:
        console.print("[yellow]Aucun dossier indexe.[/yellow]")
        return
    for name in names:
        console.print(f"  {name}")
    console.print(f"\n[bold]{len(names)}[/bold] dossier(s)")


def search(
    query: Annotated[
        str,
        typer.Argument(help="Texte recherche (nom, dossier ou codec)"),
    ],
) -> None:
    """Recherche dans le catalogue."""
    asyncio.run(_search_async(query))


@with_container()
async def _search_async(container, query: str) -> None:
    records = container.catalog_service().search(query)
    if not records:
        console.print(f"[yellow]Aucun resultat pour '{query}'.[/yellow]")
        return
    console.print(_videos_table(records, title=f"Recherche: {query}"))


def stats(
    path: Annotated[
        Path,
        typer.Argument(help="Repertoire racine a analyser"),
    ],
    refresh: Annotated[
        bool,
        typer.Option("--refresh", "-r", help="Ignorer le cache et relancer l'analyse"),
    ] = False,
) -> None:
    """Affiche l'occupation disque d'une arborescence."""
    asyncio.run(_stats_async(path, refresh))


@with_container(requires_db=False)
async def _stats_async(container, path: Path, refresh: bool) -> None:
    """Implementation async de la commande stats."""
    root = path.expanduser().resolve()
    analyzer = container.storage_analyzer_service()

    result = None if refresh else analyzer.get_cached_stats(root)
    if result is not None:
        console.print("[dim]Statistiques en cache[/dim]")
    else:
        channel = container.progress()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Analyse en cours...", total=None)

            def on_progress(event) -> None:
                if isinstance(event, StorageProgress) and not event.is_complete:
                    progress.update(
                        task,
                        description=f"[cyan]{format_bytes(event.total_size)}[/cyan] {event.current_path}",
                    )

            unsubscribe = channel.subscribe(on_progress)
            try:
                with suppress_loguru():
                    result = await analyzer.analyze_storage(root)
            except StorageAnalysisError as e:
                console.print(f"[red]Erreur:[/red] {e}")
                raise typer.Exit(code=1)
            finally:
                unsubscribe()

    table = Table(title=f"Stockage: {result.directory_path}")
    table.add_column("", style="bold")
    table.add_column("Fichiers", justify="right")
    table.add_column("Taille", justify="right")
    table.add_row("Total", str(result.total_files), format_bytes(result.total_size))
    table.add_row("Video", str(result.video_files), format_bytes(result.video_size))
    console.print(table)


def clear(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Ne pas demander de confirmation"),
    ] = False,
) -> None:
    """Vide le catalogue."""
    if not yes and not typer.confirm("Supprimer toutes les entrees du catalogue ?"):
        console.print("Annule.")
        raise typer.Exit(0)
    asyncio.run(_clear_async())


@with_container()
async def _clear_async(container) -> None:
    removed = container.catalog_service().clear_index()
    console.print(f"[green]{removed} entree(s) supprimee(s)[/green]")


@async_command
async def check() -> None:
    """Verifie la presence de ffmpeg et ffprobe."""
    settings = Settings()
    checker = DependencyChecker(ffmpeg_path=settings.ffmpeg_path, ffprobe_path=settings.ffprobe_path)
    results = await checker.check_dependencies()

    table = Table(title="Dependances")
    table.add_column("Outil", style="cyan")
    table.add_column("Commande")
    table.add_column("Statut")
    for dep in results:
        status = "[green]installe[/green]" if dep.is_installed else "[red]manquant[/red]"
        table.add_row(dep.name, dep.command, status)
    console.print(table)

    missing = [dep for dep in results if not dep.is_installed]
    if missing:
        for dep in missing:
            console.print(f"[yellow]{dep.name}:[/yellow] {dep.install_instructions}")
        raise typer.Exit(1)
