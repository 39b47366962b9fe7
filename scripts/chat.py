"""Interactive chat over the embedded work logs.

Usage:
    python scripts/chat.py [--max-results N]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from worklog_chat.bootstrap import build_components
from worklog_chat.config.settings import Settings
from worklog_chat.exceptions import WorklogChatError
from worklog_chat.models.schemas import ChatRequest
from worklog_chat.observability.logger import setup_logging


async def main(max_results: int) -> int:
    settings = Settings()
    setup_logging(settings.log_level, json_output=False)
    try:
        components = await build_components(settings)
    except WorklogChatError as e:
        print(f"Error: {e}")
        return 1

    print("Work Log Chat")
    print('Ask me anything about your work logs (type "exit" to quit):\n')

    while True:
        try:
            query = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        query = query.strip()
        if query.lower() == "exit":
            break
        if not query:
            continue

        print("Thinking...\n")
        try:
            response = await components.chat_service.process_query(
                ChatRequest(query=query, max_results=max_results)
            )
        except WorklogChatError as e:
            print(f"Error: {e}\n")
            continue

        print(f"Answer:\n{response.answer}\n")
        if response.sources:
            print(f"Sources: {', '.join(response.sources)}")
        print(f"Found {response.documents_found} relevant documents")
        print(f"Query type: {'Temporal' if response.is_temporal_query else 'Content-based'}\n")

    print("Goodbye!")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Chat with your work logs")
    parser.add_argument("--max-results", type=int, default=10)
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.max_results)))
