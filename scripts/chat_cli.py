#!/usr/bin/env python3
"""Chat with the knowledge base from the terminal. Prints each answer with its cited sources."""
import argparse
import asyncio
import getpass
import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

for p in [ROOT / "config" / "env" / ".env", ROOT / ".env"]:
    if p.exists():
        load_dotenv(p, override=False)
        break

from kb_chat.chat.session import Conversation
from kb_chat.chat.state import LocalStateStore, check_password
from kb_chat.core.config.env import get_password
from kb_chat.core.config.loader import load_chat_config
from kb_chat.core.contracts.chat import MARKETS, PRODUCTS, ChatMessage
from kb_chat.core.exceptions import ConfigError

CONFIG_PATH = os.environ.get("CONFIG_PATH", "config/chat.json")


def _print_reply(message: ChatMessage) -> None:
    print(message.text, flush=True)
    if message.source_names:
        print("\nSources:", flush=True)
        for name in message.source_names:
            print(f"  • {name}", flush=True)
    titles = message.grounding_titles()
    if titles:
        print("\nDocuments (/source N to read one):", flush=True)
        for i, title in enumerate(titles, 1):
            print(f"  [{i}] {title}", flush=True)
    print("---", flush=True)


def _print_source(message: ChatMessage | None, arg: str) -> None:
    if message is None or not message.grounding_chunks:
        print("No documents attached to the last answer.", flush=True)
        return
    try:
        number = int(arg)
    except ValueError:
        print("Usage: /source N", flush=True)
        return
    text = message.grounding_text(number)
    if text is None:
        print(f"No text for document {number} (1-{len(message.grounding_chunks)}).", flush=True)
        return
    print(f"[{number}] {message.grounding_titles()[number - 1]}\n{text}\n---", flush=True)


def _login(state: LocalStateStore, password: str | None) -> bool:
    if password is None or state.is_authenticated():
        return True
    for _ in range(3):
        candidate = getpass.getpass("Password: ")
        if check_password(candidate, password):
            state.mark_authenticated()
            return True
        print("Incorrect password. Please try again.", file=sys.stderr)
    return False


def _interactive(args: argparse.Namespace, conversation: Conversation, state: LocalStateStore, suggestions: list[str]) -> None:
    print(f"Session: {conversation.session_id[:8]}...  (/reset for a new conversation, /quit to exit)", flush=True)
    if suggestions:
        print(f'Try: "{suggestions[0]}"', flush=True)
    turn = 0
    last_reply = None
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            print(flush=True)
            return
        if not line:
            continue
        if line in ("/quit", "/exit"):
            return
        if line == "/reset":
            state.save_session_id(conversation.reset())
            last_reply = None
            print(f"New conversation. Session: {conversation.session_id[:8]}...", flush=True)
            continue
        if line.split()[0] == "/source":
            _print_source(last_reply, line[len("/source"):].strip())
            continue
        last_reply = asyncio.run(conversation.ask(line, args.market, args.product))
        _print_reply(last_reply)
        turn += 1
        if suggestions:
            print(f'Try: "{suggestions[turn % len(suggestions)]}"', flush=True)


def main():
    parser = argparse.ArgumentParser(description="Ask the knowledge base questions. Answers are printed with their sources.")
    parser.add_argument("question", nargs="*", help="Ask a single question and exit (omit for an interactive prompt)")
    parser.add_argument("--market", default="all", choices=MARKETS, help="Market filter")
    parser.add_argument("--product", default="all", choices=PRODUCTS, help="Product filter")
    parser.add_argument("--url", default=None, help="Webhook base URL (overrides config and KB_CHAT_BASE_URL)")
    parser.add_argument("--config", default=CONFIG_PATH, help="Chat config path")
    parser.add_argument("--new-session", action="store_true", help="Start a new conversation instead of resuming the stored one")
    parser.add_argument("--trace", action="store_true", help="Log each request and retry")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.trace else logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_chat_config(args.config, project_root=ROOT)
    except ConfigError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    if args.url:
        config = config.model_copy(update={"base_url": args.url})

    state_path = Path(config.state_file_path)
    state = LocalStateStore(state_path if state_path.is_absolute() else ROOT / state_path)
    if not _login(state, get_password()):
        sys.exit(1)

    session_id = state.load_session_id()
    conversation = Conversation(config=config, session_id=session_id)
    if args.new_session:
        state.save_session_id(conversation.reset())

    question = " ".join(args.question).strip()
    if question:
        _print_reply(asyncio.run(conversation.ask(question, args.market, args.product)))
        if conversation.last_error:
            sys.exit(1)
        return

    try:
        _interactive(args, conversation, state, config.example_questions)
    except KeyboardInterrupt:
        print(flush=True)


if __name__ == "__main__":
    main()
