"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    CURRENCY: str = "EUR"  # 기준 통화 (ISO 4217)
    LANGUAGE: str = "fi"  # 설명문 언어


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "ledger.yaml"


class Precision:
    """숫자 정밀도 상수"""

    CENT: Decimal = Decimal("0.01")  # 분개 금액 단위
    QUANTITY: Decimal = Decimal("0.00000001")  # 수량 텍스트 표기 (소수점 8자리)
    QUANTITY_PLACES: int = 8
