"""Text form of an encoded file.

    <alphabet size>
    <symbol>\\t<probability>\\t<codeword>     one row per symbol, table order
    <blank line>
    <bitstream of '0' and '1' characters>

The symbol is written as the raw byte, so it may itself be a tab or a
newline; rows are therefore parsed by position rather than split on
whitespace.
"""
import math
from typing import BinaryIO

from shannon_fano.abc import CodeTable, EncodedType, ProbabilityEntry, ProbabilityTable
from shannon_fano.code_table import is_prefix_free
from shannon_fano.errors import MalformedArtifactError

PROBABILITY_FORMAT = "{:f}"
MAX_ALPHABET_SIZE = 256
NL = b"\n"


def dumps(encoded: EncodedType) -> bytes:
    table: ProbabilityTable = encoded["meta"]["table"]
    codes: CodeTable = encoded["meta"]["codes"]
    bits: str = encoded["data"]

    out = bytearray()
    out += str(len(table)).encode("ascii") + NL
    for e in table:
        out.append(e.symbol)
        out += b"\t" + PROBABILITY_FORMAT.format(e.probability).encode("ascii")
        out += b"\t" + codes[e.symbol].encode("ascii") + NL
    out += NL
    out += bits.encode("ascii")
    return bytes(out)


def dump(encoded: EncodedType, fp: BinaryIO) -> None:
    fp.write(dumps(encoded))


def _read_line(raw: bytes, pos: int, what: str) -> tuple[bytes, int]:
    end = raw.find(NL, pos)
    if end < 0:
        raise MalformedArtifactError(f"unterminated {what} at offset {pos}")
    line = raw[pos:end]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line, end + 1


def _parse_header(raw: bytes) -> tuple[int, int]:
    line, pos = _read_line(raw, 0, "header")
    # Plain decimal digits only, as written by dumps()
    if not line.isdigit():
        raise MalformedArtifactError(f"invalid alphabet size {line!r}")
    size = int(line)
    if not 1 <= size <= MAX_ALPHABET_SIZE:
        raise MalformedArtifactError(f"alphabet size out of range: {size}")
    return size, pos


def _parse_row(raw: bytes, pos: int, row: int) -> tuple[int, float, str, int]:
    if pos + 1 >= len(raw) or raw[pos + 1 : pos + 2] != b"\t":
        raise MalformedArtifactError(f"row {row}: expected '<symbol>\\t' at offset {pos}")
    symbol = raw[pos]

    line, pos = _read_line(raw, pos + 2, f"row {row}")
    fields = line.split(b"\t")
    if len(fields) != 2:
        raise MalformedArtifactError(f"row {row}: expected probability and codeword")

    try:
        p = float(fields[0].decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        raise MalformedArtifactError(f"row {row}: invalid probability {fields[0]!r}") from None
    if math.isnan(p) or not 0.0 <= p <= 1.0:
        raise MalformedArtifactError(f"row {row}: probability out of range: {p}")

    code = fields[1].decode("ascii", errors="replace")
    if code == "" or code.strip("01") != "":
        raise MalformedArtifactError(f"row {row}: invalid codeword {fields[1]!r}")
    return symbol, p, code, pos


def loads(raw: bytes) -> EncodedType:
    size, pos = _parse_header(raw)

    table: ProbabilityTable = []
    codes: CodeTable = {}
    for row in range(size):
        if pos >= len(raw):
            raise MalformedArtifactError(f"expected {size} rows, found {row}")
        symbol, p, code, pos = _parse_row(raw, pos, row)
        if symbol in codes:
            raise MalformedArtifactError(f"row {row}: duplicate symbol {symbol}")
        # Counts are not persisted, only probabilities
        table.append(ProbabilityEntry(symbol, 0, p))
        codes[symbol] = code

    if len(set(codes.values())) != len(codes) or not is_prefix_free(codes):
        raise MalformedArtifactError("code table is not prefix-free")

    if raw[pos : pos + 1] == NL:
        pos += 1
    elif raw[pos : pos + 2] == b"\r\n":
        pos += 2
    else:
        raise MalformedArtifactError(f"expected blank line after {size} rows at offset {pos}")

    body = raw[pos:]
    for term in (b"\r\n", NL):
        if body.endswith(term):
            body = body[: -len(term)]
            break
    if body.strip(b"01") != b"":
        raise MalformedArtifactError("bitstream contains characters other than '0' and '1'")

    return {"data": body.decode("ascii"), "meta": {"table": table, "codes": codes}}


def load(fp: BinaryIO) -> EncodedType:
    return loads(fp.read())
