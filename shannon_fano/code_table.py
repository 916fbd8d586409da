import math

from shannon_fano.abc import CodeTable, ProbabilityTable
from shannon_fano.errors import EmptyInputError


def find_split(table: ProbabilityTable, lo: int, hi: int) -> int:
    """Index of the first element of the right partition of table[lo:hi+1].

    The right partition starts at the first element whose running sum
    exceeds half of the range total. Counts are compared instead of
    probabilities, so `2 * running <= total` decides exactly what
    `p <= total / 2` decides on real numbers.
    """
    total = sum(e.count for e in table[lo : hi + 1])
    running = 0
    split = -1
    for i in range(lo, hi + 1):
        running += table[i].count
        if 2 * running > total:
            split = i
            break

    if split < 0:
        split = lo + 1
    # A dominant first element still goes left; both halves stay non-empty
    return max(split, lo + 1)


def _assign(table: ProbabilityTable, lo: int, hi: int, bits: dict[int, list[str]]) -> None:
    if lo == hi:
        return
    elif hi - lo == 1:
        bits[table[lo].symbol].append("0")
        bits[table[hi].symbol].append("1")
        return

    split = find_split(table, lo, hi)
    assert lo < split <= hi, f"bad split {split} for range [{lo}, {hi}]"
    for i in range(lo, hi + 1):
        bits[table[i].symbol].append("0" if i < split else "1")

    _assign(table, lo, split - 1, bits)
    _assign(table, split, hi, bits)


def build_code_table(table: ProbabilityTable) -> CodeTable:
    """Shannon-Fano code for a probability table sorted most probable first.

    Each level of recursion bisects the range by cumulative probability and
    appends one bit to every symbol in it: '0' on the left, '1' on the
    right. A one-symbol alphabet gets the codeword "0" so that every
    codeword can be read back from a bitstream.
    """
    if len(table) == 0:
        raise EmptyInputError()
    if len(table) == 1:
        return {table[0].symbol: "0"}

    bits: dict[int, list[str]] = {e.symbol: [] for e in table}
    assert len(bits) == len(table), "duplicate symbols in probability table"
    _assign(table, 0, len(table) - 1, bits)

    return {s: "".join(b) for s, b in bits.items()}


def is_prefix_free(codes: CodeTable) -> bool:
    words = sorted(codes.values())
    # After sorting, a prefix sits directly before one of its extensions
    for a, b in zip(words, words[1:]):
        if b.startswith(a):
            return False
    return True


def entropy(table: ProbabilityTable) -> float:
    return -sum(e.probability * math.log2(e.probability) for e in table)


def average_code_length(table: ProbabilityTable, codes: CodeTable) -> float:
    return sum(e.probability * len(codes[e.symbol]) for e in table)
