"""
로깅 설정 유틸리티

가져오기(import) 실행과 이력 재생(replay) 등에서 사용하는 공통 로깅 설정.
- 콘솔: INFO 레벨
- 파일: DEBUG 레벨 (TimedRotatingFileHandler, 매일 자정 교체)

사용법:
    from core.logging import setup_logging
    setup_logging("import")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 최대 7일치

# 파일 레벨이 DEBUG보다 높을 때 INFO로 올릴 로거
NOISY_LOGGERS = [
    "core.text.parser",  # 해석 실패(decode-miss)마다 DEBUG
    "core.stock.tracker",  # 재고 변경마다 DEBUG
]


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """로그 파일 경로 (예: logs/import.log)"""
    return (log_dir or Paths.LOGS_DIR) / f"{process_name}.log"


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # import.log.2026-02-21
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설치

    여러 번 호출해도 핸들러가 중복되지 않음 (기존 핸들러는 닫고 제거).

    Args:
        process_name: 프로세스 이름 (로그 파일명, 예: "import", "replay")
        console_level: 콘솔 로그 레벨
        file_level: 파일 로그 레벨
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        루트 Logger
    """
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # 필터링은 핸들러에서
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root.addHandler(_console_handler(console_level, formatter))
    root.addHandler(_file_handler(log_file, file_level, formatter))

    if file_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)

    root.info(
        f"로깅 초기화: {process_name} (콘솔 {logging.getLevelName(console_level)}, "
        f"파일 {log_file} {logging.getLevelName(file_level)})"
    )
    return root
