"""Program wiring: config, connection, duplex session and message printing."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from .config import load_session_config
from .config.model import SessionConfig
from .errors.handling import log_error
from .errors.internal import ConfigurationError, NetworkError
from .irc.line_source import LineSource, StdinLineSource
from .irc.models import Message
from .irc.session import DuplexSession
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def format_message(message: Message) -> str:
    """Render ``prefix - body``; lines without a body show command and params."""
    text = message.body or " ".join(p for p in (message.command, message.params) if p)
    return f"{message.prefix} - {text}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minimal duplex IRC client: prints decoded server messages "
        "and forwards stdin lines to the server verbatim.",
    )
    parser.add_argument("--server", help="Server hostname (default: $IRC_SERVER)")
    parser.add_argument("--port", type=int, help="Server port (default: $IRC_PORT)")
    parser.add_argument("--nick", help="Nickname (default: $IRC_NICK)")
    parser.add_argument("--realname", help="Real name (default: $IRC_REALNAME)")
    parser.add_argument(
        "--read-timeout",
        type=float,
        help="Seconds without inbound data before giving up (default: block forever)",
    )
    return parser


async def run_session(
    config: SessionConfig,
    line_source: LineSource | None = None,
    output: TextIO | None = None,
) -> int:
    """Open a session, print every inbound message, return the message count."""
    out = output or sys.stdout
    session = await DuplexSession.open(config, line_source or StdinLineSource())
    count = 0
    async with session:
        async for message in session.messages():
            print(format_message(message), file=out, flush=True)
            count += 1
    return count


async def main(argv: Sequence[str] | None = None) -> int:
    """Main function"""
    args = build_parser().parse_args(argv)
    try:
        logger.log_event("app", "start")
        config = load_session_config(
            {
                "server": args.server,
                "port": args.port,
                "nick": args.nick,
                "realname": args.realname,
                "read_timeout": args.read_timeout,
            }
        )
        await run_session(config)
        return 0
    except ConfigurationError as e:
        logger.log_event("app", "config_invalid", level=logging.ERROR, error=str(e))
        return 2
    except NetworkError as e:
        log_error("Session ended by transport failure", e)
        return 1
    finally:
        logger.log_event("app", "shutdown")


def run(argv: Sequence[str] | None = None) -> int:
    LoggerConfigurator().configure()
    try:
        return asyncio.run(main(argv))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        return 130
