from collections.abc import Callable
from pathlib import Path

import pytest

from recordstats.config import Settings
from recordstats.pipeline import ReportRunner


@pytest.fixture()
def temp_workspace(tmp_path: Path) -> Path:
    (tmp_path / "data").mkdir(parents=True, exist_ok=True)
    (tmp_path / "outputs").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture()
def test_settings(temp_workspace: Path) -> Settings:
    return Settings(
        app_name="recordstats",
        log_level="INFO",
        default_output_path=str(temp_workspace / "outputs" / "report.txt"),
        default_delimiter=",",
    )


@pytest.fixture()
def runner(test_settings: Settings) -> ReportRunner:
    return ReportRunner(test_settings)


@pytest.fixture()
def write_input(temp_workspace: Path) -> Callable[..., Path]:
    def _write(content: str, name: str = "records.csv") -> Path:
        path = temp_workspace / "data" / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
