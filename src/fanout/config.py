import json
import logging
import os
import tomllib
from pathlib import Path

from eth_utils import is_address
from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt, PositiveFloat, ValidationError, field_validator

import fanout.constants as C
from fanout.errors import ConfigError

log = logging.getLogger("fanout.config")


class DispatchConfig(BaseModel):
    """Run configuration. value/gas_price stay strings until the builder parses them."""

    private_keys: list[str] = Field(min_length=1)
    rpc_url: str = Field(min_length=1)
    chain_id: int
    to_address: str = Field(min_length=1)
    value: str = ""  # wei
    gas_limit: NonNegativeInt = C.DEFAULT_GAS_LIMIT
    gas_price: str = ""  # wei, empty -> eth_gasPrice
    data: str = ""
    rpc_timeout: PositiveFloat = C.RPC_TIMEOUT
    stagger: NonNegativeFloat = C.STAGGER

    @field_validator("value", "gas_price", mode="before")
    @classmethod
    def _ints_as_decimal_str(cls, v):
        # amounts may be written as bare integers in the file
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if v is None:
            return ""
        return v

    @field_validator("to_address")
    @classmethod
    def _valid_address(cls, v: str) -> str:
        if not is_address(v):
            raise ValueError(f"not a 20-byte hex address: {v!r}")
        return v


def _read(path: Path) -> dict:
    text = path.read_text()
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return tomllib.loads(text)


def load_config(path: str | Path) -> DispatchConfig:
    path = Path(path)
    try:
        raw = _read(path)
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {path}") from e
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"cannot parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a table/object at top level")

    if rpc_url := os.getenv("RPC_URL"):
        log.debug("RPC_URL from environment overrides %s", raw.get("rpc_url"))
        raw["rpc_url"] = rpc_url

    try:
        cfg = DispatchConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}:\n{e}") from e

    log.debug("Loaded %s: %d keys -> %s via %s", path, len(cfg.private_keys), cfg.to_address, cfg.rpc_url)
    return cfg
