# apsystems_monitor/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser


DEFAULT_PORT = 8899
DEFAULT_TZ = "UTC"


@dataclass
class EcuConfig:
    host: str = "localhost"
    port: int = DEFAULT_PORT
    timezone: str = DEFAULT_TZ
    cooldown_ms: int = 25      # pause between requests so the ECU keeps up
    timeout: float | None = 10.0

    @property
    def cooldown(self) -> float:
        return self.cooldown_ms / 1000.0


@dataclass
class LoggingConfig:
    console_level: str = "INFO"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)
    structured_enabled: bool = False
    structured_path: str | None = None


@dataclass
class AppConfig:
    ecu: EcuConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> "AppConfig":
        return cls(ecu=EcuConfig(), logging=LoggingConfig())


class Config:
    def __init__(self, path: str):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str) -> AppConfig:
        cfg = cls(path)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        def _maybe_float(raw: str | None) -> float | None:
            if raw is None:
                return None
            raw = raw.strip()
            if not raw:
                return None
            value = float(raw)
            return value if value > 0 else None

        # --- ECU ---
        ecu_kwargs = {}
        if "ecu" in p:
            ecu_sec = p["ecu"]
            if "host" in ecu_sec:
                ecu_kwargs["host"] = ecu_sec["host"].strip()
            if "port" in ecu_sec:
                ecu_kwargs["port"] = int(ecu_sec["port"])
            if "timezone" in ecu_sec:
                ecu_kwargs["timezone"] = ecu_sec["timezone"].strip() or DEFAULT_TZ
            if "cooldown_ms" in ecu_sec:
                ecu_kwargs["cooldown_ms"] = int(ecu_sec["cooldown_ms"])
            if "timeout" in ecu_sec:
                ecu_kwargs["timeout"] = _maybe_float(ecu_sec["timeout"])
        ecu_cfg = EcuConfig(**ecu_kwargs)

        if ecu_cfg.cooldown_ms < 0:
            raise ValueError("[ecu] cooldown_ms must not be negative")

        # --- Logging ---
        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
            if "structured_enabled" in logging_sec:
                logging_kwargs["structured_enabled"] = _as_bool(logging_sec["structured_enabled"])
            if "structured_path" in logging_sec:
                logging_kwargs["structured_path"] = logging_sec["structured_path"]
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            ecu=ecu_cfg,
            logging=logging_cfg,
        )
