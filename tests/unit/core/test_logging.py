"""core/logging.py 테스트"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Iterator

import pytest

from core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_log_file_path(self, temp_dir: Path) -> None:
        assert get_log_file_path("import", temp_dir) == temp_dir / "import.log"

    def test_handlers(self, temp_dir: Path, restore_root_logger: None) -> None:
        """콘솔 + daily 파일 핸들러"""
        root = setup_logging("import", log_dir=temp_dir)

        assert root is logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert (temp_dir / "import.log").exists()

    def test_repeated_setup_replaces_handlers(self, temp_dir: Path, restore_root_logger: None) -> None:
        setup_logging("import", log_dir=temp_dir)
        root = setup_logging("replay", log_dir=temp_dir)
        assert len(root.handlers) == 2

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger: None) -> None:
        """파일 레벨이 DEBUG보다 높으면 해석 실패 로그 억제"""
        setup_logging("import", file_level=logging.INFO, log_dir=temp_dir)
        assert logging.getLogger("core.text.parser").level == logging.INFO
