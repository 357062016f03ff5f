# === FILE: site_spider/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteSpider.
Используется Pydantic для описания схемы и проверки данных.

Конфигурация описывает две группы параметров:
* параметры обхода, которые потребляет внешний краулер (прокси, User-Agent,
  фильтры хостов/портов/ссылок/расширений);
* параметры извлечения (какие <script> считать JavaScript, какие MIME-типы
  считать JS-ресурсами и иконками).

Значения по умолчанию из окружения (прокси, User-Agent) читаются один раз:
при создании объекта конфигурации.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

PROXY_ENV = "SITE_SPIDER_HTTP_PROXY"
USER_AGENT_ENV = "SITE_SPIDER_HTTP_USER_AGENT"
DEFAULT_USER_AGENT = "SiteSpider/0.1"

_HostPattern = str
_PortPattern = Union[int, str]


def _env_proxy() -> Optional[str]:
    return os.environ.get(PROXY_ENV) or None


def _env_user_agent() -> str:
    return os.environ.get(USER_AGENT_ENV) or DEFAULT_USER_AGENT


class SpiderConfig(BaseModel):
    """Конфигурация одного запуска извлечения."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    # --- параметры обхода (используются внешним краулером) ---
    proxy: Optional[str] = Field(
        default_factory=_env_proxy, description="HTTP-прокси; по умолчанию из SITE_SPIDER_HTTP_PROXY."
    )
    user_agent: str = Field(
        default_factory=_env_user_agent,
        min_length=1,
        description="Заголовок User-Agent; по умолчанию из SITE_SPIDER_HTTP_USER_AGENT.",
    )
    referer: Optional[str] = Field(None, description="Заголовок Referer.")
    delay: float = Field(0.0, ge=0, description="Пауза между запросами (секунд).")
    schemes: List[str] = Field(default_factory=lambda: ["http", "https"], description="Допустимые схемы URL.")
    host: Optional[str] = Field(None, description="Единственный хост для обхода.")
    hosts: List[_HostPattern] = Field(default_factory=list, description="Шаблоны разрешённых хостов.")
    ignore_hosts: List[_HostPattern] = Field(default_factory=list, description="Шаблоны игнорируемых хостов.")
    ports: List[_PortPattern] = Field(default_factory=list, description="Разрешённые порты.")
    ignore_ports: List[_PortPattern] = Field(default_factory=list, description="Игнорируемые порты.")
    links: List[str] = Field(default_factory=list, description="Шаблоны разрешённых ссылок.")
    ignore_links: List[str] = Field(default_factory=list, description="Шаблоны игнорируемых ссылок.")
    exts: List[str] = Field(default_factory=list, description="Разрешённые расширения пути.")
    ignore_exts: List[str] = Field(default_factory=list, description="Игнорируемые расширения пути.")
    max_depth: Optional[int] = Field(None, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: Optional[int] = Field(None, ge=1, description="Жесткий лимит по числу страниц.")

    # --- параметры извлечения ---
    base_url: Optional[HttpUrl] = Field(None, description="Корневой URL архивированного сайта.")
    script_types: List[str] = Field(
        default_factory=lambda: ["text/javascript"],
        description="Значения атрибута type у <script>, которые считаются JavaScript.",
    )
    javascript_content_types: List[str] = Field(
        default_factory=lambda: ["application/javascript", "text/javascript", "application/x-javascript"],
        description="MIME-типы загруженных JS-ресурсов.",
    )
    icon_content_types: List[str] = Field(
        default_factory=lambda: ["image/x-icon", "image/vnd.microsoft.icon"],
        description="MIME-типы иконок (favicon).",
    )

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("script_types", "javascript_content_types", "icon_content_types", mode="after")
    def _lower_mime(cls, v: List[str]) -> List[str]:
        return [item.strip().lower() for item in v]

    @field_validator("schemes", mode="after")
    def _lower_schemes(cls, v: List[str]) -> List[str]:
        return [item.lower() for item in v]


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> SpiderConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект SpiderConfig.
    Без пути использует configs/default.yaml, а при его отсутствии:
    значения по умолчанию. Явно указанный, но отсутствующий файл - FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return SpiderConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return SpiderConfig(**data)


__all__ = ["SpiderConfig", "load_config", "PROXY_ENV", "USER_AGENT_ENV", "DEFAULT_USER_AGENT"]
