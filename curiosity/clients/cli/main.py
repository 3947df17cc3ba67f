"""
Curiosity CLI - interactive chat against a local or hosted model.

Usage:
    python run_cli.py [--base-url URL] [--model NAME] [--debug]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from curiosity import config
from curiosity.clients.cli.capabilities import default_capabilities
from curiosity.clients.common.printer import Printer
from curiosity.runtime import ConversationRuntime
from curiosity.runtime.capabilities import CapabilityRegistry
from curiosity.runtime.llm import OpenAIChatCompletionsProvider

logger = logging.getLogger("curiosity.cli")


async def _stdin_lines(queue: asyncio.Queue[str]):
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            await queue.put("__EOF__")
            return
        await queue.put(line.rstrip("\n"))


async def _run_turn(runtime: ConversationRuntime, printer: Printer, text: str) -> None:
    try:
        async for event in runtime.submit(text):
            printer.handle(event)
    finally:
        printer.close()


async def run(base_url: Optional[str] = None, model: Optional[str] = None) -> None:
    printer = Printer()
    registry = CapabilityRegistry(default_capabilities(printer))
    runtime = ConversationRuntime(registry)

    try:
        runtime.register_provider(OpenAIChatCompletionsProvider(base_url=base_url, model=model))
    except Exception as e:
        # The runtime reports the missing backend on the first message.
        logger.error("Could not create the chat provider: %s", e)

    printer.console.print("[bold]Curiosity[/bold] [dim]/reset clears the conversation, /quit exits[/dim]")

    stdin_q: asyncio.Queue[str] = asyncio.Queue()
    reader = asyncio.create_task(_stdin_lines(stdin_q))
    try:
        while True:
            printer.console.print("\n[bold cyan]>[/bold cyan] ", end="")
            line = await stdin_q.get()
            if line == "__EOF__":
                return
            line = line.strip()
            if not line:
                continue
            if line.lower() in ("/quit", "/exit"):
                return
            if line.lower() == "/reset":
                runtime.reset()
                printer.console.print("[dim]Conversation cleared.[/dim]")
                continue

            try:
                await _run_turn(runtime, printer, line)
            except asyncio.CancelledError:
                # Ctrl+C lands here while a reply is streaming.
                printer.cancelled()
                raise
    finally:
        reader.cancel()


def main():
    parser = argparse.ArgumentParser(description="Curiosity CLI")
    parser.add_argument("--base-url", default=None, help="OpenAI-compatible endpoint (default: llm.base_url)")
    parser.add_argument("--model", default=None, help="Model name (default: llm.model_name)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(run(base_url=args.base_url, model=args.model))
    except KeyboardInterrupt:
        pass
    print("\nGoodbye!")


if __name__ == "__main__":
    main()
