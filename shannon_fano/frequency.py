from collections import Counter

from shannon_fano.abc import FrequencyTable, ProbabilityEntry, ProbabilityTable
from shannon_fano.errors import EmptyInputError


def build_frequency_table(data: bytes) -> FrequencyTable:
    if len(data) == 0:
        raise EmptyInputError()
    return dict(Counter(data))


def build_probability_table(
    freqs: FrequencyTable, total: int | None = None
) -> ProbabilityTable:
    """Normalize counts and sort by probability, most probable first.

    Equal probabilities are ordered by symbol value so the table (and hence
    the code) is the same on every run.
    """
    if total is None:
        total = sum(freqs.values())
    if total <= 0 or len(freqs) == 0:
        raise EmptyInputError()
    if total != sum(freqs.values()):
        raise ValueError(f"total={total} != sum of counts {sum(freqs.values())}")

    table = [ProbabilityEntry(s, f, f / total) for s, f in freqs.items()]
    table.sort(key=lambda e: (-e.count, e.symbol))
    return table
