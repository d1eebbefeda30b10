"""Store configuration."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

ENV_PREFIX = "UNISTORE_"

_TRUE_WORDS = {"1", "true", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "no", "n", "off"}


def _env_bool(key: str, value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_WORDS:
        return True
    if normalized in _FALSE_WORDS:
        return False
    raise ConfigurationError(
        f"invalid boolean value {value!r}", component="StoreConfig", config_key=key
    )


class StoreConfig(BaseModel):
    """
    Store 的配置。

    屬性:
        name: Store 的名稱，用於 repr 與日誌。
        strict: 為 True 時，reducer 返回 None 會被視為錯誤。
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="store", min_length=1)
    strict: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """
        從環境變數讀取配置，未設定的欄位使用預設值。

        Args:
            environ: 環境變數映射，預設為 os.environ。

        Returns:
            StoreConfig 實例。
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        name = env.get(f"{ENV_PREFIX}NAME", "").strip() or defaults.name
        strict = _env_bool(f"{ENV_PREFIX}STRICT", env.get(f"{ENV_PREFIX}STRICT"), defaults.strict)
        return cls(name=name, strict=strict)
