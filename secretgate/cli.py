from secretgate import __version__
from secretgate.client import GateClient
from secretgate.config import load_config, ConfigError
from secretgate.probe import run_probe
from secretgate.reporting import ConsoleReporter
from secretgate.server import create_app
import argparse
import logging
import sys
from typing import List, Optional
from colorama import init

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

def build_serve_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secretgate",
        description="SECRETGATE // shared-flag login gate",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("-v", "--version", action="version", version=f"SECRETGATE v{__version__}")

    conf_group = parser.add_argument_group("Configuration")
    conf_group.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    conf_group.add_argument("--config", help="Path to YAML config file")

    net_group = parser.add_argument_group("Server")
    net_group.add_argument("--host", default=None, help="Bind host (default: HOST or 127.0.0.1)")
    net_group.add_argument("--port", type=int, default=None, help="Bind port (default: PORT or 3000)")
    net_group.add_argument("--audit-log", default=None, help="Append authentication attempts to this file")
    net_group.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    net_group.add_argument("--verbose", action="store_true")
    return parser

def build_probe_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="secretgate probe", description="Smoke-check a running gate server")
    parser.add_argument("base_url", help="Server URL (e.g., http://127.0.0.1:3000)")
    parser.add_argument("--username", help="Also authenticate with these credentials (unlocks the server!)")
    parser.add_argument("--password")
    parser.add_argument("--timeout", type=float, default=5.0)
    parser.add_argument("--verbose", action="store_true")
    return parser

def setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)

def serve(args: argparse.Namespace) -> int:
    reporter = ConsoleReporter()
    overrides = {
        "host": args.host,
        "port": args.port,
        "audit_log": args.audit_log,
        "debug": True if args.debug else None,
    }
    try:
        config = load_config(env_file=args.env_file, config_path=args.config, overrides=overrides)
    except ConfigError as e:
        reporter.print_error(str(e))
        return 1

    app = create_app(config)
    reporter.print_banner(config.summary())
    # Threaded so concurrent clients hit the same Gate; the reloader would fork a second one.
    app.run(host=config.host, port=config.port, debug=config.debug, threaded=True, use_reloader=False)
    return 0

def probe(args: argparse.Namespace) -> int:
    if bool(args.username) != bool(args.password):
        ConsoleReporter().print_error("--username and --password must be given together.")
        return 2

    client = GateClient(args.base_url, timeout=args.timeout, verbose=args.verbose)
    try:
        results = run_probe(client, username=args.username, password=args.password)
    finally:
        client.close()
    return 0 if ConsoleReporter().print_probe_summary(args.base_url, results) else 1

def main(argv: Optional[List[str]] = None) -> int:
    init(autoreset=True)
    argv = list(sys.argv[1:] if argv is None else argv)

    if argv and argv[0] == "probe":
        args = build_probe_parser().parse_args(argv[1:])
        setup_logging(args.verbose)
        return probe(args)

    if argv and argv[0] == "serve":
        argv = argv[1:]
    args = build_serve_parser().parse_args(argv)
    setup_logging(args.verbose)
    return serve(args)

if __name__ == "__main__":
    sys.exit(main())
