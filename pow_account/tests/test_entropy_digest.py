from __future__ import annotations

import hashlib

import pytest

from pow_account.digest import DIGEST_SIZE, blake2s_256
from pow_account.entropy import ENTROPY_SIZE, Entropy, system_entropy
from pow_account.errors import EntropyError, ErrorCode


def test_new_entropy_has_a_length_of_32():
    assert len(Entropy.new().raw) == ENTROPY_SIZE == 32
    assert len(system_entropy()) == 32


def test_new_entropy_is_unique():
    assert Entropy.new().raw != Entropy.new().raw


def test_entropy_generates_256bit_hash():
    assert len(Entropy.new().hash()) == DIGEST_SIZE == 32


def test_entropy_created_from_a_set_of_bytes():
    a = Entropy.new().raw
    assert Entropy.from_bytes(a).raw == a


def test_entropy_rejects_wrong_size():
    with pytest.raises(ValueError):
        Entropy.from_bytes(b"\x00" * 31)


def test_blake2s_hash_can_be_validated():
    origin = bytes.fromhex("c37289b48949a7d172346cb3e5600da905f53e7c022d364836dcf57db4de33fa")
    expected = "7478987293e1864fd833ae3607bc99b9b22e7ca39bced21c3b0428bd9c7218ba"
    assert Entropy.from_bytes(origin).hash().hex() == expected
    assert blake2s_256(origin).hex() == expected


def test_blake2s_matches_hashlib():
    data = bytes(range(32))
    assert blake2s_256(data) == hashlib.blake2s(data).digest()


def test_blake2s_rejects_text():
    with pytest.raises(TypeError):
        blake2s_256("abc")  # type: ignore[arg-type]


def test_injected_source_is_used(scripted):
    buf = bytes(range(32))
    src = scripted([buf])
    assert Entropy.new(src).raw == buf
    assert src.calls == 1


@pytest.mark.parametrize("bad", [b"\x00" * 16, b"\x00" * 33, "x" * 32, None])
def test_malformed_source_raises_entropy_error(bad):
    with pytest.raises(EntropyError) as ei:
        Entropy.new(lambda: bad)
    assert ei.value.code == ErrorCode.ENTROPY
    assert ei.value.expected == 32
