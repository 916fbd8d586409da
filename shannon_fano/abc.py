from abc import ABC, abstractmethod
from typing import Any, NamedTuple, TypeAlias


class ProbabilityEntry(NamedTuple):
    symbol: int
    count: int
    probability: float


# Type aliases for the tables passed between the coding stages
FrequencyTable: TypeAlias = dict[int, int]
ProbabilityTable: TypeAlias = list[ProbabilityEntry]
CodeTable: TypeAlias = dict[int, str]
EncodedType: TypeAlias = dict[str, Any]


class Compressor(ABC):
    @abstractmethod
    def encode(self, data: bytes) -> EncodedType:
        pass

    @abstractmethod
    def decode(self, encoded: EncodedType) -> bytes:
        pass
