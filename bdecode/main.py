import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError
from json import dumps
from typing import Literal, TypedDict, cast

from bdecode.bencoding import DEFAULT_MAX_DEPTH, decode_bencode
from bdecode.errors import DecodeError

COMMANDS = ("decode",)

logger = logging.getLogger(__name__)


class DecodeArgs(TypedDict):
    command: Literal["decode"]
    verbose: bool
    bencoded_string: str
    strict: bool
    max_depth: int


Args = DecodeArgs


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def parse_args(args: list[str]) -> Args:
    parser = ArgumentParser("bdecode")
    parser.add_argument("-v", "--verbose", action="store_true")
    cmds = parser.add_subparsers(dest="command", required=True)
    # Decode
    decode = cmds.add_parser("decode")
    decode.add_argument("bencoded_string", type=str)
    decode.add_argument("--strict", action="store_true")
    decode.add_argument("--max-depth", type=non_negative_int, default=DEFAULT_MAX_DEPTH)

    ns = parser.parse_args(args)
    args = {k: v for k, v in ns._get_kwargs()}
    return cast(Args, args)


def find_command(args: list[str]) -> str | None:
    for arg in args:
        if not arg.startswith("-"):
            return arg
    return None


def main(args: list[str] | None = None) -> int:
    if args is None:
        args = sys.argv[1:]

    command = find_command(args)
    if command is not None and command not in COMMANDS:
        print(f"unknown command: {command}")
        return 1

    parsed = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed["verbose"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed["command"] == "decode":
        try:
            value = decode_bencode(
                parsed["bencoded_string"],
                strict=parsed["strict"],
                max_depth=parsed["max_depth"],
            )
        except DecodeError as err:
            logger.debug("Decoding failed for %s", err.input)
            print(f"error: {err}", file=sys.stderr)
            return 1
        print(dumps(value, ensure_ascii=False))
    else:
        raise NotImplementedError(f"Unknown command {parsed['command']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
