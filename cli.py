# Role: Local developer CLI to talk to a ChatSession without the web UI or the HTTP backend.
# Useful for poking the persona and seeing debug logs in the terminal.

from __future__ import annotations
import asyncio
import uuid

import savage_dev.config
savage_dev.config.load_env()

from savage_dev.core.chat_session import ChatSession
from savage_dev.llm.gemini_client import GeminiClient


def _new_session_id() -> str:
    return str(uuid.uuid4())


def main() -> None:
    # 1) Create one GeminiClient and one event loop for the whole run
    # 2) Keep a ChatSession across turns (/new starts a fresh one)
    # 3) Read input synchronously, drive each submit on the loop, print assistant output
    print("SAVAGE_DEV :: root@savage-terminal: ~")
    print("Commands: /new (new session), /session (show session_id), /exit")
    print("-" * 50)

    client = GeminiClient()
    session = ChatSession(_new_session_id(), client=client)
    print(f"session_id: {session.session_id}")

    loop = asyncio.new_event_loop()
    try:
        while True:
            try:
                user_message = input("\n$ ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            if not user_message:
                continue

            cmd = user_message.lower()

            if cmd in {"/exit", "exit", "quit", "/quit"}:
                print("Bye!")
                return

            if cmd in {"/new", "new"}:
                session = ChatSession(_new_session_id(), client=client)
                print(f"New session_id: {session.session_id}")
                continue

            if cmd in {"/session", "session"}:
                print(f"session_id: {session.session_id}")
                continue

            print("Thinking...")
            try:
                reply = loop.run_until_complete(session.submit(user_message))
            except KeyboardInterrupt:
                print("\nBye!")
                return

            if reply is not None:
                stamp = reply.timestamp.astimezone().strftime("%H:%M:%S")
                print(f"\nCORE_AI • {stamp}\n{reply.content}")
    finally:
        loop.close()


if __name__ == "__main__":
    main()
