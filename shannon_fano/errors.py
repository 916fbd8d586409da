"""Exceptions raised by the Shannon-Fano coder.

Every error is terminal for the encode or decode call that raised it.
"""


class ShannonFanoError(Exception):
    pass


class EmptyInputError(ShannonFanoError, ValueError):
    def __init__(self, message: str = "input contains no symbols") -> None:
        super().__init__(message)


class UnknownSymbolError(ShannonFanoError, KeyError):
    def __init__(self, symbol: int) -> None:
        super().__init__(f"symbol {symbol} has no codeword")
        self.symbol = symbol

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class UnmatchedBitsError(ShannonFanoError, ValueError):
    def __init__(self, bits: str) -> None:
        super().__init__(f"bitstream ends with unmatched bits: {bits!r}")
        self.bits = bits


class MalformedArtifactError(ShannonFanoError, ValueError):
    pass
