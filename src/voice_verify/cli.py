from __future__ import annotations

import argparse
from collections.abc import Callable

import uvicorn

from .config import get_settings
from .logging_config import setup_logging
from .main import CONFIRM_FAILED, INITIATE_FAILED
from .twilio_client import get_verification_client
from .verification import VerificationClient, confirm_verification, initiate_verification

QUIT_WORDS = {"/q", "/quit", "/exit"}


class Quit(Exception):
    pass


def _ask(prompt: str, input_fn: Callable[[str], str]) -> str:
    try:
        answer = input_fn(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        raise Quit from None
    if answer.lower() in QUIT_WORDS:
        raise Quit
    return answer


def call_flow(
    client: VerificationClient,
    message_template: str,
    input_fn: Callable[[str], str] = input,
) -> bool:
    """
    Interactive terminal version of the web flow.

    Asks for a number, places the call, asks for the code and confirms it.
    Returns True once a code is confirmed, False if the user quits.
    """
    print("Voice verification. Type /quit to exit.\n")
    try:
        while True:
            country_code = _ask("country code> ", input_fn)
            phone_number = _ask("phone number> ", input_fn)
            started = initiate_verification(client, country_code, phone_number, message_template)
            if not started.ok:
                print(f"{INITIATE_FAILED}\n")
                continue

            token = _ask("code> ", input_fn)
            confirmed = confirm_verification(client, started.verification_id or "", token)
            if not confirmed.ok:
                print(f"{CONFIRM_FAILED}\n")
                continue

            print("Phone number verified.")
            return True
    except Quit:
        return False


def serve(host: str, port: int) -> None:
    uvicorn.run("voice_verify.main:app", host=host, port=port)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="voice-verify")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="run the web front end")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    sub.add_parser("call", help="verify a number from the terminal")

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "serve":
        serve(args.host, args.port)
    else:
        call_flow(get_verification_client(), settings.message_template)


if __name__ == "__main__":
    main()
