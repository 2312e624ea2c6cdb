# apsystems_monitor/main.py

from datetime import datetime, timezone
from pathlib import Path
import sys

from .cli import build_parser
from .config import AppConfig, Config
from .errors import EcuError
from .logging import ConsoleLog, StructuredLog, RunLogEntry
from .models.response import EcuResponse
from .protocol.decoders import decode_array_info, decode_ecu_info, decode_signal_info
from .services.ecu_client import EcuClient
from .services.output_formatter import emit_json, emit_human


def load_config(path: str | None) -> AppConfig:
    if not path:
        return AppConfig.default()
    return Config.load(path)


def apply_overrides(app_cfg: AppConfig, args) -> AppConfig:
    if getattr(args, "host", None):
        app_cfg.ecu.host = args.host
    if getattr(args, "port", None) is not None:
        app_cfg.ecu.port = args.port
    if getattr(args, "tz", None):
        app_cfg.ecu.timezone = args.tz
    return app_cfg


def read_capture(path: str) -> bytes:
    """Load a captured frame; hex text (whitespace ignored) or raw bytes."""
    data = sys.stdin.buffer.read() if path == "-" else Path(path).read_bytes()
    try:
        return bytes.fromhex("".join(data.decode("ascii").split()))
    except (UnicodeDecodeError, ValueError):
        return data


def decode_capture(kind: str, frame: bytes, tz: str) -> EcuResponse:
    if kind == "ecu":
        return EcuResponse(ecu_info=decode_ecu_info(frame))
    if kind == "array":
        return EcuResponse(array_info=decode_array_info(frame, tz))
    if kind == "signal":
        return EcuResponse(signal_info=decode_signal_info(frame))
    raise ValueError(f"Unsupported frame kind: {kind}")


def _emit(response: EcuResponse, as_json: bool) -> None:
    if as_json:
        emit_json(response)
    else:
        emit_human(response)


def run_get(app_cfg: AppConfig, log, as_json: bool, structured: StructuredLog) -> int:
    client = EcuClient(app_cfg.ecu, log)
    now = datetime.now(timezone.utc)
    response = None
    error = None
    try:
        response = client.get_data()
    except EcuError as exc:
        log.error("Error: %s", exc)
        error = str(exc)
        response = exc.partial if isinstance(exc.partial, EcuResponse) else None
    except OSError as exc:
        log.error("Could not connect to ECU at %s:%s: %s", app_cfg.ecu.host, app_cfg.ecu.port, exc)
        error = str(exc)

    if response is not None:
        _emit(response, as_json)

    structured.write(
        RunLogEntry(
            timestamp=now.isoformat(),
            host=app_cfg.ecu.host,
            ecu_info=response.ecu_info if response else None,
            array_info=response.array_info if response else None,
            signal_info=response.signal_info if response else None,
            error=error,
        )
    )
    return 0 if error is None else 1


def run_decode(args, app_cfg: AppConfig, log) -> int:
    try:
        frame = read_capture(args.file)
    except OSError as exc:
        log.error("Could not read %s: %s", args.file, exc)
        return 1

    try:
        response = decode_capture(args.kind, frame, app_cfg.ecu.timezone)
    except EcuError as exc:
        log.error("Could not decode %s frame: %s", args.kind, exc)
        partial = exc.partial
        if partial is not None and not isinstance(partial, (bytes, bytearray)):
            field = {"ecu": "ecu_info", "array": "array_info", "signal": "signal_info"}[args.kind]
            _emit(EcuResponse(**{field: partial}), args.json)
        return 1

    _emit(response, args.json)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    app_cfg = apply_overrides(load_config(args.config), args)
    console_logger = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    )
    log = console_logger.setup()

    if args.command == "get":
        structured_logger = StructuredLog(
            app_cfg.logging.structured_path,
            app_cfg.logging.structured_enabled,
        )
        return run_get(app_cfg, log, args.json, structured_logger)
    if args.command == "decode":
        return run_decode(args, app_cfg, log)
    raise ValueError(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
