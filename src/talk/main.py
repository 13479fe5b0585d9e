#!/usr/bin/env python3
"""
Talk Channel Client

Command line client that drives the channel sessions over a WebSocket
command session.

Configuration:
    TALK_SERVER_URL: WebSocket URL of the server (default ws://localhost:8080)
    TALK_LOG_LEVEL: Logging level name (default WARNING)
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict, is_dataclass
from typing import List, Optional

from websockets.exceptions import ConnectionClosed

from .channel_session import ChannelManageSession, ChannelSession
from .command_session import WebSocketCommandSession
from .schemas import Channel, ChatLogged, CommandResult
from .status import is_success

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "ws://localhost:8080"


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="talk-client", description="Run a channel command"
    )
    parser.add_argument(
        "--server-url",
        default=os.environ.get("TALK_SERVER_URL", DEFAULT_SERVER_URL),
        help="WebSocket URL of the server",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("TALK_LOG_LEVEL", "WARNING"),
        help="Logging level",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    send = commands.add_parser("send", help="Send a text chat")
    send.add_argument("channel_id", type=int)
    send.add_argument("text")

    read = commands.add_parser("read", help="Mark chats read up to a log id")
    read.add_argument("channel_id", type=int)
    read.add_argument("log_id", type=int)

    info = commands.add_parser("info", help="Fetch channel info")
    info.add_argument("channel_id", type=int)

    leave = commands.add_parser("leave", help="Leave a channel")
    leave.add_argument("channel_id", type=int)
    leave.add_argument("--block", action="store_true")

    commands.add_parser("memo", help="Create a self memo channel")

    return parser


async def run_command(
    args: argparse.Namespace, session: WebSocketCommandSession
) -> int:
    """
    Run one command on a connected command session.

    Args:
        args: Parsed command line arguments
        session: Connected command session with its receive loop running

    Returns:
        Process exit code (0 on success)
    """
    manage = ChannelManageSession(session)

    if args.command == "send":
        channel = ChannelSession(Channel(args.channel_id), session)
        response = await channel.send_chat(args.text)
        print(json.dumps(response))
        return 0 if is_success(response.get("status")) else 1
    if args.command == "memo":
        response = await manage.create_memo_channel()
        print(json.dumps(response))
        return 0 if is_success(response.get("status")) else 1

    result: CommandResult
    if args.command == "read":
        channel = ChannelSession(Channel(args.channel_id), session)
        result = await channel.mark_read(ChatLogged(log_id=args.log_id))
    elif args.command == "info":
        channel = ChannelSession(Channel(args.channel_id), session)
        result = await channel.get_channel_info()
    else:
        result = await manage.leave_channel(
            Channel(args.channel_id), block=args.block
        )

    output = result.to_dict()
    if is_dataclass(output.get("result")):
        output["result"] = asdict(output["result"])
    print(json.dumps(output))
    return 0 if result.success else 1


async def run_client(args: argparse.Namespace) -> int:
    """Connect, run the requested command and disconnect."""
    session = WebSocketCommandSession(args.server_url)
    await session.connect()
    receive_task = asyncio.create_task(session.handle_messages())

    try:
        return await run_command(args, session)
    finally:
        await session.disconnect()
        receive_task.cancel()
        try:
            await receive_task
        except asyncio.CancelledError:
            pass


def main(argv: Optional[List[str]] = None):
    """Main entry point for the talk client."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting talk client...")

    try:
        sys.exit(asyncio.run(run_client(args)))
    except (ConnectionError, ConnectionClosed) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
