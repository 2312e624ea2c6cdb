# apsystems_monitor/cli.py
import argparse

from apsystems_monitor.config import DEFAULT_PORT


def build_parser():
    parser = argparse.ArgumentParser(
        prog="aps",
        description=(
            "Read inverter status, production statistics and zigbee signal "
            "strength from an APsystems ECU-R (wifi only)"
        ),
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (optional)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress log output (cron-friendly)"
    )

    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Emit JSON instead of tables"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # Poll the ECU
    cmd_get = sub.add_parser("get", help="Get data from the ECU-R")
    cmd_get.add_argument(
        "--host", "-a",
        help="ECU-R address (default: [ecu] host or localhost)",
    )
    cmd_get.add_argument(
        "--port", "-p",
        type=int,
        help=f"Port on which to connect with the ECU-R (default {DEFAULT_PORT})",
    )
    cmd_get.add_argument(
        "--tz",
        help="IANA timezone of the ECU-R, used to parse its timestamp",
    )

    # Offline decoding of a captured frame
    cmd_decode = sub.add_parser(
        "decode",
        help="Decode a captured response frame (hex text or raw bytes)",
    )
    cmd_decode.add_argument(
        "--kind",
        choices=("ecu", "array", "signal"),
        required=True,
        help="Which response the frame is",
    )
    cmd_decode.add_argument(
        "--tz",
        help="IANA timezone used for array info timestamps",
    )
    cmd_decode.add_argument(
        "file",
        help="File holding the frame, '-' for stdin",
    )

    return parser
