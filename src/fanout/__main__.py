import argparse
import asyncio
import logging
import sys
from pathlib import Path

import fanout.constants as C
from fanout.config import load_config
from fanout.dispatcher import Dispatcher
from fanout.errors import ConfigError, PreflightError
from fanout.ledger import JsonRpcLedgerClient
from fanout.logging_config import setup_logging

log = logging.getLogger("fanout.main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="fanout",
                                     description="Send one transfer per private key to a single address.")
    parser.add_argument("-c", "--config",
                        type=Path,
                        default=Path(C.DEFAULT_CONFIG_FILE),
                        help="Config file (.toml or .json).",
                        )
    parser.add_argument("--log-level",
                        help="Overrides LOG_LEVEL.",
                        )
    parser.add_argument("--stagger",
                        type=float,
                        help="Seconds between worker launches (0 disables).",
                        )
    return parser.parse_args(argv)


async def dispatch(config) -> int:
    async with JsonRpcLedgerClient(config.rpc_url, timeout=config.rpc_timeout) as ledger:
        dispatcher = Dispatcher(config, ledger)
        await dispatcher.preflight()
        summary = await dispatcher.run()
    return C.EXIT_OK if summary.failures == 0 else C.EXIT_PARTIAL


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        log.error("Failed to load config: %s", e)
        return C.EXIT_FATAL
    if args.stagger is not None:
        config = config.model_copy(update={"stagger": max(args.stagger, 0.0)})

    try:
        return asyncio.run(dispatch(config))
    except PreflightError as e:
        log.error("%s", e)
        return C.EXIT_FATAL
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return C.EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
