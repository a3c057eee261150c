"""
Tests pour DependencyChecker.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shadowcrawler.adapters.probing.dependency_checker import DependencyChecker


class TestDependencyChecker:
    """Tests de la verification de ffmpeg/ffprobe."""

    @pytest.mark.asyncio
    async def test_missing_binary_reported(self, tmp_path):
        checker = DependencyChecker(
            ffmpeg_path=str(tmp_path / "no-ffmpeg"),
            ffprobe_path=str(tmp_path / "no-ffprobe"),
        )

        results = await checker.check_dependencies()

        assert [dep.name for dep in results] == ["FFmpeg", "FFprobe"]
        assert all(not dep.is_installed for dep in results)

    @pytest.mark.asyncio
    async def test_missing_dependencies_filters_installed(self):
        checker = DependencyChecker()

        with patch.object(
            checker, "check_command", new=AsyncMock(side_effect=lambda cmd: cmd == "ffmpeg")
        ):
            missing = await checker.missing_dependencies()

        assert [dep.name for dep in missing] == ["FFprobe"]
        assert missing[0].install_instructions

    @pytest.mark.asyncio
    async def test_hanging_command_is_killed_and_reaped(self, monkeypatch):
        monkeypatch.setattr(
            "shadowcrawler.adapters.probing.dependency_checker._CHECK_TIMEOUT_SECONDS", 0.01
        )
        waits = []

        async def wait():
            waits.append(len(waits))
            if len(waits) == 1:
                await asyncio.sleep(10)
            return -9

        process = MagicMock()
        process.wait = wait
        checker = DependencyChecker()

        with patch(
            "shadowcrawler.adapters.probing.dependency_checker.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=process),
        ):
            installed = await checker.check_command("ffmpeg")

        assert installed is False
        process.kill.assert_called_once()
        assert len(waits) == 2
