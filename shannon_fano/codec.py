from typing import Any, BinaryIO

import tqdm  # noqa

from shannon_fano import artifact
from shannon_fano.abc import CodeTable, Compressor, EncodedType, ProbabilityTable
from shannon_fano.code_table import build_code_table
from shannon_fano.errors import MalformedArtifactError, UnknownSymbolError, UnmatchedBitsError
from shannon_fano.frequency import build_frequency_table, build_probability_table


def ch(x: int) -> str:
    if 32 <= x < 127:
        return chr(x)
    elif x == ord("\n"):
        return "\\n"
    elif x == ord("\t"):
        return "\\t"
    return f"<{x:02x}>"


def encode_symbols(data: bytes, codes: CodeTable, verbose: bool = False) -> str:
    out: list[str] = []
    for s in tqdm.tqdm(data, desc="Encoding", disable=not verbose):
        code = codes.get(s)
        if code is None:
            raise UnknownSymbolError(s)
        out.append(code)
    return "".join(out)


def decode_bits(bits: str, codes: CodeTable, verbose: bool = False) -> bytes:
    lookup = {code: s for s, code in codes.items()}
    max_len = max((len(c) for c in lookup), default=0)

    decoded = bytearray()
    accum = ""
    for i, b in enumerate(tqdm.tqdm(bits, desc="Decoding", disable=not verbose)):
        if b != "0" and b != "1":
            raise MalformedArtifactError(f"invalid bit {b!r} at offset {i}")
        accum += b
        s = lookup.get(accum)
        if s is not None:
            decoded.append(s)
            accum = ""
        elif len(accum) >= max_len:
            # No codeword is this long, nothing can match any more
            raise UnmatchedBitsError(accum)

    if accum != "":
        raise UnmatchedBitsError(accum)
    return bytes(decoded)


def print_table(table: ProbabilityTable, codes: CodeTable) -> None:
    print(len(table))
    for e in table:
        print(f"{ch(e.symbol)}\t{e.probability:f}\t{codes[e.symbol]}")


class ShannonFano(Compressor):
    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def encode(self, data: bytes) -> EncodedType:
        assert type(data) is bytes
        freqs = build_frequency_table(data)
        table = build_probability_table(freqs, len(data))
        codes = build_code_table(table)

        if self.verbose:
            print("Alphabet:", [ch(e.symbol) for e in table])
            print("Total Frequency M=", len(data))
            print("PMF:", [round(e.probability, 6) for e in table])
            print_table(table, codes)

        encoded = encode_symbols(data, codes, self.verbose)

        meta: dict[str, Any] = {
            "table": table,
            "codes": codes,
            "length": len(data),
        }
        return {"data": encoded, "meta": meta}

    def decode(self, encoded: EncodedType) -> bytes:
        bits: str = encoded["data"]
        codes: CodeTable = encoded["meta"]["codes"]

        decoded = decode_bits(bits, codes, self.verbose)

        length = encoded["meta"].get("length")
        if length is not None and length != len(decoded):
            raise MalformedArtifactError(
                f"decoded {len(decoded)} symbols, expected {length}"
            )
        return decoded


def encode_stream(src: BinaryIO, dst: BinaryIO, verbose: bool = False) -> EncodedType:
    encoded = ShannonFano(verbose).encode(src.read())
    artifact.dump(encoded, dst)
    return encoded


def decode_stream(src: BinaryIO, dst: BinaryIO, verbose: bool = False) -> bytes:
    decoded = ShannonFano(verbose).decode(artifact.load(src))
    dst.write(decoded)
    return decoded
