"""
설정 로더

ledger.yaml 로드 및 계정 역할(role) → 계정 번호 해석.
설정은 불변 값으로 만들어 추적기/거래 팩토리/설명문 코덱 생성자에 명시적으로 전달.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml

from core.constants import Defaults, Paths
from core.utils.currency import is_currency_code

logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """설정 파일 로드 실패 예외"""

    pass


class ConfigurationError(Exception):
    """설정 누락 예외

    계정 역할이나 템플릿 변수가 설정되지 않아 분개/설명문을 완성할 수 없는 경우.
    """

    pass


def _freeze(value: Any, lower_keys: bool = False) -> Any:
    """중첩 dict를 읽기 전용 매핑으로 변환"""
    if isinstance(value, Mapping):
        return MappingProxyType({
            (str(k).lower() if lower_keys else str(k)): _freeze(v, lower_keys)
            for k, v in value.items()
        })
    if isinstance(value, list):
        return tuple(_freeze(v, lower_keys) for v in value)
    return value


def _thaw(value: Any) -> Any:
    """_freeze()의 역변환 (직렬화용)"""
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class LedgerFlags:
    """라이브러리 동작 플래그

    Attributes:
        no_profit: 매도 시 손익 분개를 생성하지 않음 (취득원가를 그대로 기록)
        trade_profit: 시세(rate)가 있는 교환(trade)에서 손익을 즉시 인식
        dry_run: 영구 변경을 하지 않음 (외부 저장소용)
        debug: 상세 디버그 정보
        force: 강제 실행
    """

    no_profit: bool = False
    trade_profit: bool = False
    dry_run: bool = False
    debug: bool = False
    force: bool = False

    @staticmethod
    def from_dict(data: Mapping[str, Any] | None) -> "LedgerFlags":
        """딕셔너리에서 생성 (알 수 없는 키는 오류)"""
        data = dict(data or {})
        known = {f for f in LedgerFlags.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            raise ConfigLoadError(f"알 수 없는 플래그: {sorted(unknown)}")
        return LedgerFlags(**{k: bool(v) for k, v in data.items()})


@dataclass(frozen=True)
class LedgerConfig:
    """원장 설정 (불변)

    accounts 예시:
        bank: "1910"
        currencies: {eur: "1920", usd: "1921"}
        targets: {btc: "1551", eth: "1552"}
        taxes: {source: "2931", income: "2932", vat: "2939"}
        fees: "9750"

    services 예시:
        Service-Z:
          tag: SZ
          loan_name: Sharks Loan
          funds: {FundA: {tag: FA}}
    """

    currency: str = Defaults.CURRENCY
    language: str = Defaults.LANGUAGE
    flags: LedgerFlags = field(default_factory=LedgerFlags)
    accounts: Mapping[str, Any] = field(default_factory=dict)
    services: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not is_currency_code(self.currency):
            raise ConfigLoadError(f"유효하지 않은 기준 통화입니다: {self.currency!r}")
        if not isinstance(self.language, str) or not self.language:
            raise ConfigLoadError(f"유효하지 않은 언어입니다: {self.language!r}")
        # 역할 하위 키(통화/대상 심볼)는 소문자로 저장 (대소문자 무관 조회)
        accounts = {
            str(role): _freeze(value, lower_keys=True)
            for role, value in (self.accounts or {}).items()
        }
        object.__setattr__(self, "accounts", MappingProxyType(accounts))
        object.__setattr__(self, "services", _freeze(self.services or {}))
        object.__setattr__(self, "tags", _freeze(self.tags or {}))

    # -------------------------------------------------------------------------
    # 생성
    # -------------------------------------------------------------------------

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "LedgerConfig":
        """딕셔너리에서 생성

        Raises:
            ConfigLoadError: 알 수 없는 키나 잘못된 값
        """
        data = dict(data)
        known = {"currency", "language", "flags", "accounts", "services", "tags"}
        unknown = set(data) - known
        if unknown:
            raise ConfigLoadError(f"알 수 없는 설정 키: {sorted(unknown)}")
        return LedgerConfig(
            currency=data.get("currency", Defaults.CURRENCY),
            language=data.get("language", Defaults.LANGUAGE),
            flags=LedgerFlags.from_dict(data.get("flags")),
            accounts=data.get("accounts") or {},
            services=data.get("services") or {},
            tags=data.get("tags") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "currency": self.currency,
            "language": self.language,
            "flags": {k: getattr(self.flags, k) for k in LedgerFlags.__dataclass_fields__},
            "accounts": _thaw(self.accounts),
            "services": _thaw(self.services),
            "tags": _thaw(self.tags),
        }

    def with_flags(self, **changes: bool) -> "LedgerConfig":
        """플래그만 바꾼 새 설정 반환"""
        return replace(self, flags=replace(self.flags, **changes))

    # -------------------------------------------------------------------------
    # 계정 역할 해석
    # -------------------------------------------------------------------------

    def resolve_account(self, role: str, subkey: str | None = None) -> str:
        """계정 역할을 계정 번호로 해석

        Args:
            role: 역할 이름 (예: "fees", "targets", 또는 점 표기 "targets.BTC")
            subkey: 하위 키 (예: 통화 코드나 대상 심볼, 대소문자 무관)

        Returns:
            계정 번호

        Raises:
            ConfigurationError: 역할이 설정되지 않은 경우
        """
        if subkey is None and "." in role:
            role, subkey = role.split(".", 1)
        name = role if subkey is None else f"{role}.{subkey}"

        value = self.accounts.get(role)
        if subkey is not None:
            value = value.get(subkey.lower()) if isinstance(value, Mapping) else None
        if value is None or isinstance(value, Mapping) or value == "":
            raise ConfigurationError(f"계정이 설정되지 않았습니다: '{name}'")
        return str(value)

    def has_account(self, role: str, subkey: str | None = None) -> bool:
        """계정 역할이 설정되어 있는지 확인"""
        try:
            self.resolve_account(role, subkey)
        except ConfigurationError:
            return False
        return True

    def all_accounts(self) -> dict[str, str]:
        """설정된 모든 계정 번호 → 점 표기 역할 이름 매핑"""
        ret: dict[str, str] = {}

        def collect(accounts: Mapping[str, Any], prefix: str) -> None:
            for name, value in accounts.items():
                if value is None:
                    continue
                if isinstance(value, Mapping):
                    collect(value, f"{prefix}{name}.")
                else:
                    ret[str(value)] = f"{prefix}{name}"

        collect(self.accounts, "")
        return ret

    # -------------------------------------------------------------------------
    # 서비스 / 태그
    # -------------------------------------------------------------------------

    def service_variables(self, service: str | None, fund: str | None = None) -> dict[str, str]:
        """설명문 C{...} 치환용 서비스 변수

        'service' 변수는 항상 서비스 이름, 'fund' 변수는 펀드 이름.

        Raises:
            ConfigurationError: 서비스가 없거나 설정되지 않은 경우
        """
        if not service:
            raise ConfigurationError("서비스가 지정되지 않은 거래는 서비스 변수를 사용할 수 없습니다")
        conf = self.services.get(service)
        if conf is None:
            raise ConfigurationError(f"서비스가 설정되지 않았습니다: '{service}'")
        variables = {
            k: str(v) for k, v in conf.items()
            if k != "funds" and not isinstance(v, Mapping)
        }
        variables["service"] = service
        if fund:
            variables["fund"] = fund
        return variables

    def services_with(self, variable: str, value: str) -> list[str]:
        """변수 값이 일치하는 서비스 이름 목록 (설명문 역해석용)"""
        if variable == "service":
            return [value] if value in self.services else []
        return [
            name for name, conf in self.services.items()
            if str(conf.get(variable, "")) == value
        ]

    def find_service(self, tags: Iterable[str]) -> str | None:
        """태그 목록에서 서비스 이름 찾기 (첫 번째 일치)"""
        by_tag = {
            str(conf["tag"]): name
            for name, conf in self.services.items() if conf.get("tag")
        }
        for tag in tags:
            if tag in by_tag:
                return by_tag[tag]
        return None

    def find_fund(self, tags: Iterable[str]) -> str | None:
        """태그 목록에서 펀드 이름 찾기 (첫 번째 일치)"""
        by_tag: dict[str, str] = {}
        for conf in self.services.values():
            for fund, fund_conf in (conf.get("funds") or {}).items():
                if isinstance(fund_conf, Mapping) and fund_conf.get("tag"):
                    by_tag[str(fund_conf["tag"])] = fund
        for tag in tags:
            if tag in by_tag:
                return by_tag[tag]
        return None


def load_config(path: Path | None = None) -> LedgerConfig:
    """ledger.yaml 파일 로드

    Args:
        path: 설정 파일 경로 (None이면 기본 경로 사용)

    Returns:
        LedgerConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"설정 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"설정 파일 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("설정 파일이 비어 있습니다")
    if not isinstance(data, Mapping):
        raise ConfigLoadError("설정 파일 최상위는 매핑이어야 합니다")

    config = LedgerConfig.from_dict(data)
    logger.debug(f"설정 로드 완료: {path} (통화={config.currency}, 언어={config.language})")
    return config
