import pytest  # noqa

from shannon_fano import artifact
from shannon_fano.codec import ShannonFano
from shannon_fano.errors import MalformedArtifactError

VALID = b"3\na\t0.500000\t0\nb\t0.375000\t10\nc\t0.125000\t11\n\n000010101011"


def test_dumps_format():
    assert artifact.dumps(ShannonFano().encode(b"aaaabbbc")) == VALID


def test_loads():
    encoded = artifact.loads(VALID)
    assert encoded["data"] == "000010101011"
    assert encoded["meta"]["codes"] == {ord("a"): "0", ord("b"): "10", ord("c"): "11"}
    assert [(e.symbol, e.probability) for e in encoded["meta"]["table"]] == [
        (ord("a"), 0.5),
        (ord("b"), 0.375),
        (ord("c"), 0.125),
    ]


def test_loads_tab_and_newline_symbols():
    data = b"\t\t\n\n\n x"
    raw = artifact.dumps(ShannonFano().encode(data))
    assert ShannonFano().decode(artifact.loads(raw)) == data


@pytest.mark.parametrize("tail", [b"\n", b"\r\n"])
def test_loads_trailing_newline(tail: bytes):
    assert artifact.loads(VALID + tail)["data"] == "000010101011"


def test_loads_crlf():
    raw = VALID.replace(b"\n", b"\r\n")
    assert ShannonFano().decode(artifact.loads(raw)) == b"aaaabbbc"


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"3",
        b"x\n",
        b" 3\na\t0.5\t0\nb\t0.25\t10\nc\t0.25\t11\n\n0\n",
        b"+3\na\t0.5\t0\nb\t0.25\t10\nc\t0.25\t11\n\n0\n",
        b"3 \na\t0.5\t0\nb\t0.25\t10\nc\t0.25\t11\n\n0\n",
        b"-1\n\n",
        b"0\n\n",
        b"257\n",
        # row count mismatch, both ways
        b"4\na\t0.500000\t0\nb\t0.375000\t10\nc\t0.125000\t11\n\n000010101011",
        b"2\na\t0.500000\t0\nb\t0.375000\t10\nc\t0.125000\t11\n\n000010101011",
        b"3\na\t0.500000\t0\nb\t0.375000\t10\n",
        b"3\na 0.500000 0\nb\t0.375000\t10\nc\t0.125000\t11\n\n0",
        b"1\na\t0.5\n\n0",
        b"1\na\tabc\t0\n\n0",
        b"1\na\t1.5\t0\n\n0",
        b"1\na\tnan\t0\n\n0",
        b"1\na\t1.0\t\n\n0",
        b"1\na\t1.0\t02\n\n0",
        b"2\na\t0.5\t0\na\t0.5\t1\n\n01",
        b"2\na\t0.5\t0\nb\t0.5\t0\n\n00",
        b"2\na\t0.5\t0\nb\t0.5\t01\n\n001",
        b"1\na\t1.0\t0\nx0",
        b"1\na\t1.0\t0\n\n0a0",
        b"1\na\t1.0\t0\n\n0\n\n",
    ],
)
def test_loads_malformed(raw: bytes):
    with pytest.raises(MalformedArtifactError):
        artifact.loads(raw)
