from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional
import os, yaml
from dotenv import load_dotenv

class RecipientCfg(BaseModel):
    name: str = ""
    address: str
    split: int = Field(ge=0)
    fee: bool = False                   # split is a percentage of the whole
    custom_key: Optional[str] = None
    custom_value: Optional[str] = None

class RemoteCfg(BaseModel):
    percentage: int = Field(default=0, ge=0)   # capped at 100 by the mixer
    recipients: list[RecipientCfg] = []

class PayoutCfg(BaseModel):
    total_sats: Optional[int] = Field(default=None, ge=0)
    recipients: list[RecipientCfg] = []
    remote: Optional[RemoteCfg] = None

class TelemetryCfg(BaseModel):
    console_enabled: bool = False
    console_channels: list[str] = ["ops"]
    console_min_level: str = "INFO"
    otel_enabled: bool = False
    otel_channels: list[str] = ["audit", "ops"]
    otel_min_level: str = "INFO"

class LoggingCfg(BaseModel):
    level: str = "INFO"

class AppConfig(BaseModel):
    payout: PayoutCfg = PayoutCfg()
    telemetry: TelemetryCfg = TelemetryCfg()
    logging: LoggingCfg = LoggingCfg()

def load_config(path: str) -> AppConfig:
    load_dotenv(override=False)
    import pathlib
    p = pathlib.Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    raw["payout"] = raw.get("payout") or {}
    raw["logging"] = raw.get("logging") or {}

    def coalesce(yaml_val, env_val):
        return env_val if (yaml_val in (None, "") and env_val not in (None, "")) else yaml_val

    env_total = os.getenv("SATSPLIT_TOTAL_SATS")
    env_level = os.getenv("SATSPLIT_LOG_LEVEL")

    raw["payout"]["total_sats"] = coalesce(raw["payout"].get("total_sats"), int(env_total) if env_total and env_total.isdigit() else None)
    raw["logging"]["level"]     = coalesce(raw["logging"].get("level"),     env_level)
    if raw["logging"]["level"] in (None, ""):
        del raw["logging"]["level"]

    return AppConfig.model_validate(raw)
