from __future__ import annotations

import logging
import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pow_account import HashFinder, Proof, Target, Variant, encode
from pow_account.digest import blake2s_256
from pow_account.errors import InvalidHexCharacter, InvalidStringLength, OddLength

ZERO32 = b"\x00" * 32
FF32 = b"\xff" * 32

ORIGIN_3 = "3ca727c7fefed674268797882ff4b26c8e28873ee6fbfae71d9ccc35e24444d4"
ORIGIN_4 = "73b8f38be026335eb78946ea30434ff3cee4cff6544d49b4772f80397d40e72f"
ORIGIN_5 = "51ad0600f06b0d57300a37952cea658410488748400628c8a2e7d712892d806e"


# ---- construction ------------------------------------------------------------

def test_default_equals_five_digits():
    assert HashFinder.default() == HashFinder.new(5)
    assert HashFinder.default().target == Target.default()
    assert HashFinder.default().variant is Variant.SINGLE


def test_equality_and_ordering_follow_target():
    assert HashFinder.new(4) == HashFinder.new(4)
    assert HashFinder.new(4) != HashFinder.new(3)
    assert HashFinder.new(4) < HashFinder.new(3)
    assert hash(HashFinder.new(2)) == hash(HashFinder.new(2))
    # saturated difficulties share a target
    assert HashFinder.new(40) == HashFinder.new(32)


def test_variant_is_part_of_identity():
    assert HashFinder.new(4, "double") != HashFinder.new(4, "single")
    assert HashFinder.new(4, "double").variant is Variant.DOUBLE


def test_unknown_variant():
    with pytest.raises(ValueError):
        HashFinder.new(4, "triple")


def test_huge_difficulty_constructs():
    f = HashFinder.new(1_000)
    assert f.target.cutoff() == 1
    assert f.check("00" * 32)


# ---- check: single variant ---------------------------------------------------

@given(st.integers(min_value=0, max_value=10_000))
def test_single_all_zero_value_passes_any_difficulty(d):
    assert HashFinder.new(d).check("00" * 32)


@given(st.integers(min_value=1, max_value=10_000), st.sampled_from("123456789abcdefABCDEF"))
def test_single_nonzero_first_digit_fails(d, first):
    assert HashFinder.new(d).check(first + "0" * 63) is False


@given(st.binary(min_size=32, max_size=32), st.integers(min_value=0, max_value=40))
def test_single_check_is_integer_comparison(raw, d):
    f = HashFinder.new(d)
    expected = int.from_bytes(raw, "big") < Target.from_leading_zeros(d).as_int()
    assert f.check(encode(raw)) == expected
    assert f.check(encode(raw).upper()) == expected
    # pure: asking twice gives the same answer
    assert f.check(encode(raw)) == expected


@given(st.binary(min_size=32, max_size=32), st.integers(min_value=0, max_value=8))
def test_double_check_compares_the_rehash(raw, d):
    expected = int.from_bytes(blake2s_256(raw), "big") < Target.from_leading_zeros(d).as_int()
    assert HashFinder.new(d, "double").check(encode(raw)) == expected


def test_single_regression_vector():
    # first hex digit is '3': no leading zeros
    assert HashFinder.new(3).check(ORIGIN_3) is False
    assert HashFinder.new(0).check(ORIGIN_3) is True


def test_single_counts_leading_zero_digits():
    value = "0000" + "a" * 60
    assert HashFinder.new(4).check(value)
    assert not HashFinder.new(5).check(value)


def test_check_is_pure():
    f = HashFinder.new(3)
    assert f.check(ORIGIN_3) == f.check(ORIGIN_3)
    d = HashFinder.new(3, "double")
    assert d.check(ORIGIN_3) == d.check(ORIGIN_3)


# ---- check: double variant ---------------------------------------------------

def test_double_checks_the_rehash():
    assert HashFinder.new(3, "double").check(ORIGIN_3)
    assert HashFinder.new(4, "double").check(ORIGIN_3) is False
    assert HashFinder.new(4, "double").check(ORIGIN_4)
    assert HashFinder.new(5, "double").check(ORIGIN_5)
    assert HashFinder.default("double").check(ORIGIN_5)


def test_double_rehash_starts_with_zeros():
    assert blake2s_256(bytes.fromhex(ORIGIN_5)).hex().startswith("00000")


# ---- check: decode errors propagate -------------------------------------------

@pytest.mark.parametrize("variant", ["single", "double"])
def test_check_decode_errors(variant):
    f = HashFinder.new(4, variant)

    with pytest.raises(InvalidHexCharacter) as ei:
        f.check("3c+727c7fefed674268797882ff4b26c8e28873ee6fbfae71d9ccc35e24444d4")
    assert ei.value == InvalidHexCharacter("+", 2)

    with pytest.raises(OddLength):
        f.check("3ca727c7fefed674268797882ff4b26c8e28873ee6fbfae71d9ccc35e24444d")

    with pytest.raises(InvalidStringLength):
        f.check("3ca727c7fefed674268797882ff4b26c8e28873ee6fbfae71d9ccc35e24444d444d4")


def test_check_bytes_requires_32():
    with pytest.raises(InvalidStringLength):
        HashFinder.new(1).check_bytes(b"\x00" * 31)
    assert HashFinder.new(1).check_bytes(ZERO32)


# ---- find (deterministic) ----------------------------------------------------

def test_find_retries_until_target_met(passthrough_finder):
    f = passthrough_finder(1, [FF32, FF32, ZERO32])
    proof = f.find_proof()
    assert proof.value == ZERO32
    assert proof.target_hash == ZERO32
    assert proof.attempts == 3
    assert proof.variant is Variant.SINGLE


def test_find_returns_digest_not_entropy(scripted):
    buf = bytes(range(32))
    f = HashFinder.new(0, entropy=scripted([buf]))
    assert f.find() == blake2s_256(buf)


def test_double_find_returns_origin(scripted):
    buf = bytes(range(32))
    f = HashFinder.new(0, "double", entropy=scripted([buf]))
    proof = f.find_proof()
    assert proof.value == blake2s_256(buf)
    assert proof.target_hash == blake2s_256(blake2s_256(buf))


def test_find_logs_attempts(passthrough_finder, caplog):
    f = passthrough_finder(1, [FF32, ZERO32])
    with caplog.at_level(logging.DEBUG, logger="pow_account.finder"):
        f.find()
    assert any("after 2 attempts" in r.getMessage() for r in caplog.records)


def test_proof_to_dict():
    p = Proof(ZERO32, FF32, 7, Variant.DOUBLE)
    assert p.to_dict() == {
        "value": "00" * 32,
        "targetHash": "ff" * 32,
        "attempts": 7,
        "variant": "double",
    }


# ---- find (real entropy) -----------------------------------------------------

def test_can_find_a_hash_which_starts_from_a_specific_pattern():
    value = HashFinder.new(4).find()
    assert len(value) == 32
    assert encode(value).startswith("0000")
    assert HashFinder.new(4).check(encode(value))


def test_double_find_rehash_starts_with_pattern():
    origin = HashFinder.new(3, "double").find()
    assert blake2s_256(origin).hex().startswith("000")
    assert HashFinder.new(3, "double").check(encode(origin))
    # a weaker finder accepts it too
    assert HashFinder.new(2, "double").check(encode(origin))


def test_find_outputs_are_distinct():
    f = HashFinder.new(1)
    assert f.find() != f.find()


def test_shared_finder_across_threads():
    f = HashFinder.new(2)
    out = []
    lock = threading.Lock()

    def worker():
        v = f.find()
        with lock:
            out.append(v)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(out) == 4
    assert all(f.check(encode(v)) for v in out)
