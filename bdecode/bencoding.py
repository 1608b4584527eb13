import logging
from dataclasses import dataclass, replace
from functools import wraps
from typing import Callable

from bdecode.cursor import DecodeInput
from bdecode.errors import DecodeError

logger = logging.getLogger(__name__)

CHAR_I = "i"
CHAR_L = "l"
CHAR_D = "d"
CHAR_E = "e"
CHAR_COL = ":"
CHAR_MINUS = "-"
DIGITS = frozenset("0123456789")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT64_MAX_DIGITS = len(str(INT64_MAX))

# Every nesting level costs a few interpreter frames, keep well below the
# default recursion limit.
DEFAULT_MAX_DEPTH = 200

BencodeValue = str | int | list | dict


@dataclass(frozen=True)
class DecodeOptions:
    strict: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


@dataclass(frozen=True)
class DecodeContext:
    options: DecodeOptions
    depth: int = 0

    def can_nest(self) -> bool:
        return self.depth < self.options.max_depth

    def nested(self) -> "DecodeContext":
        return replace(self, depth=self.depth + 1)


DecodeResult = tuple[BencodeValue | None, DecodeInput]
TryDecodeResult = tuple[BencodeValue, DecodeInput] | None
Decoder = Callable[[DecodeInput, DecodeContext], DecodeResult]


def decoder(
    try_decode: Callable[[DecodeInput, DecodeContext], TryDecodeResult],
) -> Decoder:
    """Turn a `try_decode` function into a decoder.

    A failed attempt hands back the cursor it was given, never a partially
    advanced one.
    """

    @wraps(try_decode)
    def run(input: DecodeInput, context: DecodeContext) -> DecodeResult:
        result = try_decode(input, context)
        if result is None:
            return (None, input)
        return result

    return run


def _is_canonical(digits: str, negative: bool = False) -> bool:
    if negative and digits == "0":
        return False
    return len(digits) == 1 or digits[0] != "0"


def _read_digits(input: DecodeInput, terminator: str) -> tuple[str | None, DecodeInput]:
    # Consumes the terminator as well
    digits = []
    ch, input = input.next()
    while ch != terminator:
        if ch is None or ch not in DIGITS:
            return (None, input)
        digits.append(ch)
        ch, input = input.next()
    return ("".join(digits), input)


@decoder
def decode_string(input: DecodeInput, context: DecodeContext) -> TryDecodeResult:
    # 4:spam
    digits, rest = _read_digits(input, CHAR_COL)
    if not digits:
        return None
    # A length with more digits than the input length cannot be satisfied
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(len(input.data))):
        return None
    if context.options.strict and not _is_canonical(digits):
        return None

    content, rest = rest.take(int(significant))
    if content is None:
        return None
    return (content, rest)


@decoder
def decode_integer(input: DecodeInput, context: DecodeContext) -> TryDecodeResult:
    # i-42e
    ch, rest = input.next()
    if ch != CHAR_I:
        return None

    negative = rest.peek() == CHAR_MINUS
    if negative:
        _, rest = rest.next()

    digits, rest = _read_digits(rest, CHAR_E)
    if not digits:
        return None
    significant = digits.lstrip("0") or "0"
    if len(significant) > INT64_MAX_DIGITS:
        return None
    if context.options.strict and not _is_canonical(digits, negative):
        return None

    value = -int(significant) if negative else int(significant)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return (value, rest)


@decoder
def decode_list(input: DecodeInput, context: DecodeContext) -> TryDecodeResult:
    # l4:spami3ee
    ch, rest = input.next()
    if ch != CHAR_L or not context.can_nest():
        return None

    element_context = context.nested()
    list_value = []
    while True:
        value, rest = run_decoder(rest, element_context)
        if value is None:
            break
        list_value.append(value)

    ch, rest = rest.next()
    if ch != CHAR_E:
        return None
    return (list_value, rest)


@decoder
def decode_dict(input: DecodeInput, context: DecodeContext) -> TryDecodeResult:
    # d3:cow3:mooe
    ch, rest = input.next()
    if ch != CHAR_D or not context.can_nest():
        return None

    item_context = context.nested()
    dict_value = {}
    last_key: str | None = None
    while True:
        key, rest = decode_string(rest, item_context)
        if key is None:
            break
        if context.options.strict and last_key is not None and key <= last_key:
            return None
        value, rest = run_decoder(rest, item_context)
        if value is None:
            return None
        dict_value[key] = value
        last_key = key

    ch, rest = rest.next()
    if ch != CHAR_E:
        return None
    return (dict_value, rest)


def decode_failure(input: DecodeInput, context: DecodeContext) -> DecodeResult:
    return (None, input)


def next_decoder(input: DecodeInput) -> Decoder:
    match input.peek():
        case ch if ch is not None and ch in DIGITS:
            return decode_string
        case "i":
            return decode_integer
        case "l":
            return decode_list
        case "d":
            return decode_dict
        case _:
            return decode_failure


def run_decoder(input: DecodeInput, context: DecodeContext) -> DecodeResult:
    return next_decoder(input)(input, context)


def _decode_value(
    bencoded_value: str, options: DecodeOptions
) -> tuple[BencodeValue, DecodeInput]:
    if not isinstance(bencoded_value, str):
        raise TypeError(f"Can't decode type {type(bencoded_value)}")

    input = DecodeInput(bencoded_value)
    try:
        value, rest = run_decoder(input, DecodeContext(options))
    except RecursionError as err:
        logger.debug("Recursion limit hit while decoding %s", input)
        raise DecodeError("Bencoded value is nested too deeply", input) from err

    if value is None:
        logger.debug("Failed to decode %s", input)
        raise DecodeError("Malformed bencoded value", input)
    return (value, rest)


def decode_bencode_prefix(
    bencoded_value: str,
    *,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[BencodeValue, int]:
    """Decode the value at the start of `bencoded_value`.

    Returns the value and the number of characters it occupied. Anything after
    that is left for the caller.
    """
    options = DecodeOptions(strict=strict, max_depth=max_depth)
    value, rest = _decode_value(bencoded_value, options)
    return (value, rest.position)


def decode_bencode(
    bencoded_value: str,
    *,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> BencodeValue:
    """Decode a single bencoded value.

    Trailing characters after the value are ignored unless `strict` is set.
    Strict mode also rejects non-canonical integers and lengths (leading
    zeros, `-0`) and dictionary keys that are not in ascending order.

    Raises `DecodeError` on malformed input.
    """
    options = DecodeOptions(strict=strict, max_depth=max_depth)
    value, rest = _decode_value(bencoded_value, options)
    if not rest.at_end:
        if strict:
            raise DecodeError("Trailing data after bencoded value", rest)
        logger.debug("Ignoring trailing data %s", rest)
    return value
