#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pydantic>=2",
#     "pygame>=2.6.1,<3",
#     "python-dotenv",
#     "requests",
# ]
# ///

# Claude Code hooks entry point
# Receives one hook event from Claude Code via stdin and plays/notifies for it.
# A hook must never break Claude Code: every failure is logged and the exit code stays 0.

import asyncio
import sys
from typing import Optional

from app.dispatcher import DispatchResult, process_hook_event
from app.types import HookInput
from utils.colored_logger import setup_logger, configure_root_logging

configure_root_logging()
logger = setup_logger(__name__)


def read_hook_input(raw: str) -> HookInput:
    """Parse the hook JSON; empty input is an error like malformed JSON."""
    if not raw.strip():
        raise ValueError("No data received from stdin")
    return HookInput.model_validate_json(raw)


def run_hook(raw: str, **dispatch_kwargs) -> Optional[DispatchResult]:
    """
    Dispatch one raw hook payload, swallowing every error.

    Returns:
        DispatchResult, or None when nothing was done or dispatch failed
    """
    try:
        hook_input = read_hook_input(raw)
        return asyncio.run(process_hook_event(hook_input, **dispatch_kwargs))
    except Exception as e:
        logger.warning(f"Hook dispatch failed: {e}")
        return None


def main():
    """Main function to handle the hook process."""
    try:
        raw = sys.stdin.read()
    except Exception as e:
        logger.warning(f"Error reading from stdin: {e}")
        raw = ""
    run_hook(raw)
    sys.exit(0)


if __name__ == "__main__":
    main()
