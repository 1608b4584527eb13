from bdecode.cursor import DecodeInput

MAX_REMAINDER_LENGTH = 40


class DecodeError(ValueError):
    def __init__(self, reason: str, input: DecodeInput) -> None:
        remainder = input.remaining
        if len(remainder) > MAX_REMAINDER_LENGTH:
            remainder = remainder[:MAX_REMAINDER_LENGTH] + "..."
        super().__init__(f"{reason} at position {input.position}: {remainder!r}")
        self.reason = reason
        self.input = input
