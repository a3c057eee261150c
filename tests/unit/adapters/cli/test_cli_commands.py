"""
Tests unitaires pour les commandes CLI.

Tests couvrant:
- crawl: delegation au CrawlerService et erreurs de racine
- list / folders / search / clear: sur une vraie base SQLite temporaire
- stats: cache et analyse
- check, info, version
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from shadowcrawler.adapters.probing.dependency_checker import DependencyCheck
from shadowcrawler.container import Container
from shadowcrawler.core.entities.video import StorageStats
from shadowcrawler.core.exceptions import CrawlRootError
from shadowcrawler.main import app
from shadowcrawler.services.progress import ProgressChannel

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Donnees dans tmp_path et logging fichier desactive."""
    monkeypatch.setenv("SHADOWCRAWLER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SHADOWCRAWLER_LOG_FILE", str(tmp_path / "logs" / "test.log"))
    with patch("shadowcrawler.main.configure_logging") as mock_logging:
        yield mock_logging


@pytest.fixture
def mock_container():
    """Mock le Container pour les tests.

    Patche Container dans helpers.py car c'est la que le decorateur
    @with_container() l'importe et l'instancie.
    """
    with patch("shadowcrawler.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.progress.return_value = ProgressChannel()
        container_instance.dependency_checker.return_value.missing_dependencies = AsyncMock(
            return_value=[]
        )
        yield container_instance


@pytest.fixture
def populated_db(record_factory):
    """Base temporaire contenant trois videos."""
    container = Container()
    container.database.init()
    repository = container.video_repository()
    repository.upsert(record_factory("beach.mp4", folder_name="Summer", creation_date=300))
    repository.upsert(record_factory("snow.mkv", folder_name="Winter", creation_date=200, codec="hevc"))
    repository.upsert(record_factory("city.mp4", folder_name="Summer", creation_date=100))
    container.engine().dispose()


# ============================================================================
# crawl
# ============================================================================


class TestCrawlCommand:
    def test_crawl_parallel(self, mock_container, tmp_path):
        mock_container.crawler_service.return_value.crawl = AsyncMock(return_value=3)

        result = runner.invoke(app, ["crawl", str(tmp_path), "--lanes", "2"])

        assert result.exit_code == 0
        assert "3" in result.stdout
        mock_container.database.init.assert_called_once()
        mock_container.crawler_service.return_value.crawl.assert_awaited_once_with(
            tmp_path.resolve(), lane_count=2
        )

    def test_crawl_sequential(self, mock_container, tmp_path):
        service = mock_container.crawler_service.return_value
        service.crawl_sequential = AsyncMock(return_value=1)

        result = runner.invoke(app, ["crawl", str(tmp_path), "--sequential"])

        assert result.exit_code == 0
        service.crawl_sequential.assert_awaited_once_with(tmp_path.resolve())

    def test_crawl_missing_directory(self, mock_container, tmp_path):
        result = runner.invoke(app, ["crawl", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "introuvable" in result.stdout

    def test_crawl_root_error(self, mock_container, tmp_path):
        mock_container.crawler_service.return_value.crawl = AsyncMock(
            side_effect=CrawlRootError(tmp_path, PermissionError("denied"))
        )

        result = runner.invoke(app, ["crawl", str(tmp_path)])

        assert result.exit_code == 1
        assert "Erreur" in result.stdout

    def test_crawl_warns_about_missing_tools(self, mock_container, tmp_path):
        mock_container.crawler_service.return_value.crawl = AsyncMock(return_value=0)
        mock_container.dependency_checker.return_value.missing_dependencies = AsyncMock(
            return_value=[DependencyCheck("FFprobe", "ffprobe", "installer ffmpeg")]
        )

        result = runner.invoke(app, ["crawl", str(tmp_path)])

        assert result.exit_code == 0
        assert "FFprobe" in result.stdout

    def test_crawl_rejects_zero_lanes(self, mock_container, tmp_path):
        result = runner.invoke(app, ["crawl", str(tmp_path), "--lanes", "0"])

        assert result.exit_code != 0


# ============================================================================
# Requetes sur le catalogue
# ============================================================================


class TestCatalogCommands:
    def test_list_empty(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Aucune video" in result.stdout

    def test_list_paginated(self, populated_db):
        result = runner.invoke(app, ["list", "--sort", "name_asc", "--page-size", "2"])

        assert result.exit_code == 0
        assert "beach.mp4" in result.stdout
        assert "city.mp4" in result.stdout
        assert "snow.mkv" not in result.stdout
        assert "Page 1 (2/3)" in result.stdout

    def test_list_folder(self, populated_db):
        result = runner.invoke(app, ["list", "--folder", "Winter"])

        assert result.exit_code == 0
        assert "snow.mkv" in result.stdout
        assert "beach.mp4" not in result.stdout

    def test_list_rejects_page_zero(self):
        result = runner.invoke(app, ["list", "--page", "0"])

        assert result.exit_code != 0

    def test_folders(self, populated_db):
        result = runner.invoke(app, ["folders"])

        assert result.exit_code == 0
        assert "Summer" in result.stdout
        assert "Winter" in result.stdout

    def test_search(self, populated_db):
        result = runner.invoke(app, ["search", "HEVC"])

        assert result.exit_code == 0
        assert "snow.mkv" in result.stdout

    def test_search_without_result(self, populated_db):
        result = runner.invoke(app, ["search", "nothing"])

        assert result.exit_code == 0
        assert "Aucun resultat" in result.stdout

    def test_clear_with_yes(self, populated_db):
        result = runner.invoke(app, ["clear", "--yes"])

        assert result.exit_code == 0
        assert "3 entree(s)" in result.stdout

    def test_clear_aborted(self, populated_db):
        result = runner.invoke(app, ["clear"], input="n\n")

        assert result.exit_code == 0
        assert "Annule" in result.stdout


# ============================================================================
# stats
# ============================================================================


class TestStatsCommand:
    def test_stats_uses_cache(self, mock_container, tmp_path):
        analyzer = mock_container.storage_analyzer_service.return_value
        analyzer.get_cached_stats.return_value = StorageStats(
            str(tmp_path), total_files=4, total_size=2048, video_files=1, video_size=1024, last_updated=1
        )
        analyzer.analyze_storage = AsyncMock()

        result = runner.invoke(app, ["stats", str(tmp_path)])

        assert result.exit_code == 0
        assert "2 KB" in result.stdout
        analyzer.analyze_storage.assert_not_awaited()
        mock_container.database.init.assert_not_called()

    def test_stats_refresh_runs_analysis(self, mock_container, tmp_path):
        analyzer = mock_container.storage_analyzer_service.return_value
        analyzer.analyze_storage = AsyncMock(
            return_value=StorageStats(str(tmp_path), total_files=2, total_size=0, last_updated=1)
        )

        result = runner.invoke(app, ["stats", str(tmp_path), "--refresh"])

        assert result.exit_code == 0
        analyzer.get_cached_stats.assert_not_called()
        analyzer.analyze_storage.assert_awaited_once_with(tmp_path.resolve())

    def test_stats_real_directory(self, tmp_path):
        """Analyse reelle (sans ffprobe : taille lue sur le disque)."""
        root = tmp_path / "media"
        root.mkdir()
        (root / "a.txt").write_bytes(b"x" * 10)

        with patch(
            "shadowcrawler.adapters.probing.ffprobe_extractor.FFprobeExtractor.probe_container_size",
            new=AsyncMock(return_value=None),
        ):
            result = runner.invoke(app, ["stats", str(root)])

        assert result.exit_code == 0
        assert "10 Bytes" in result.stdout
        assert (tmp_path / "data" / "cache" / "storage_stats.json").exists()


# ============================================================================
# check, info, version
# ============================================================================


class TestMiscCommands:
    def test_check_all_installed(self):
        checks = [
            DependencyCheck("FFmpeg", "ffmpeg", "x", is_installed=True),
            DependencyCheck("FFprobe", "ffprobe", "y", is_installed=True),
        ]
        with patch("shadowcrawler.adapters.cli.commands.DependencyChecker") as mock_cls:
            mock_cls.return_value.check_dependencies = AsyncMock(return_value=checks)
            result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "FFprobe" in result.stdout

    def test_check_missing_exits_with_error(self):
        checks = [DependencyCheck("FFmpeg", "ffmpeg", "Installer FFmpeg", is_installed=False)]
        with patch("shadowcrawler.adapters.cli.commands.DependencyChecker") as mock_cls:
            mock_cls.return_value.check_dependencies = AsyncMock(return_value=checks)
            result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "Installer FFmpeg" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "ShadowCrawler v0.1.0" in result.stdout

    def test_info(self, tmp_path):
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert str(tmp_path / "data") in result.stdout

    def test_verbosity_passed_to_logging(self, isolated_env):
        runner.invoke(app, ["-vv", "version"])

        assert isolated_env.call_args.kwargs["log_level"] == "DEBUG"

    def test_quiet(self, isolated_env):
        runner.invoke(app, ["-q", "version"])

        assert isolated_env.call_args.kwargs["log_level"] == "ERROR"
