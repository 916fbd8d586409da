import sys
from typing import NoReturn

import fire  # noqa

from shannon_fano import artifact
from shannon_fano.code_table import average_code_length, entropy
from shannon_fano.codec import ShannonFano
from shannon_fano.errors import ShannonFanoError

DEFAULT_ENCODED_NAME = "encoded.txt"
DEFAULT_DECODED_NAME = "decoded.txt"


def fail(err: ShannonFanoError) -> NoReturn:
    print(f"Error: {type(err).__name__}: {err}", file=sys.stderr)
    sys.exit(1)


def encode(in_file: str, out_file: str = DEFAULT_ENCODED_NAME, verbose: bool = False) -> None:
    """Encode IN_FILE into a Shannon-Fano artifact (default: encoded.txt)."""
    with open(in_file, "rb") as f:
        data = f.read()

    try:
        encoded = ShannonFano(verbose).encode(data)
        raw = artifact.dumps(encoded)
    except ShannonFanoError as e:
        fail(e)

    with open(out_file, "wb") as f:
        f.write(raw)

    if verbose:
        print(encoded["data"])
    print(f"Encoded {len(data)} symbols into {out_file}")


def decode(in_file: str, out_file: str = DEFAULT_DECODED_NAME, verbose: bool = False) -> None:
    """Decode the artifact IN_FILE back into bytes (default: decoded.txt)."""
    with open(in_file, "rb") as f:
        raw = f.read()

    try:
        decoded = ShannonFano(verbose).decode(artifact.loads(raw))
    except ShannonFanoError as e:
        fail(e)

    with open(out_file, "wb") as f:
        f.write(decoded)

    if verbose:
        print(decoded.decode("utf-8", errors="replace"))
    print(f"Decoded {len(decoded)} symbols into {out_file}")


def stats(in_file: str, verbose: bool = False) -> None:
    """Encode and decode IN_FILE in memory and report the code quality."""
    with open(in_file, "rb") as f:
        data = f.read()

    comp = ShannonFano(verbose)
    try:
        encoded = comp.encode(data)
        decoded = comp.decode(artifact.loads(artifact.dumps(encoded)))
    except ShannonFanoError as e:
        fail(e)

    if data != decoded:
        print("Error: decoded data does not match original!")
        print(f"Original data: {len(data)} {data[:20]!r}...")
        print(f"Decoded data:  {len(decoded)} {decoded[:20]!r}...")
        raise RuntimeError("Decoded data does not match original!")

    table = encoded["meta"]["table"]
    codes = encoded["meta"]["codes"]
    bits = encoded["data"]
    print("Data successfully encoded and decoded!")
    print("Alphabet size:", len(table))
    print("Data length: ", len(data), "symbols")
    print(f"Encoded length: {len(bits)} bits = {len(bits) / 8:.2f} bytes")
    print(f"Entropy: {entropy(table):.4f} bits/symbol")
    print(f"Average code length: {average_code_length(table, codes):.4f} bits/symbol")
    print(f"Compression rate: {len(data) * 8 / len(bits):.2f}x")


def cli() -> None:
    fire.Fire({"encode": encode, "decode": decode, "stats": stats})


if __name__ == "__main__":
    cli()
