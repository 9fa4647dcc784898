"""Order-agnostic fingerprints for topping multisets.

Fingerprints must satisfy the following invariants:
1. Any permutation of the same toppings yields the same fingerprint.
2. Repeated toppings change the fingerprint, so ``["olive"]`` and
   ``["olive", "olive"]`` are different combinations.
3. The value is reproducible across processes. Python's built-in ``hash`` is
   salted per interpreter and is therefore never used for topping names.
"""

from __future__ import annotations

from typing import Callable, Iterable

WORD_MASK = 0xFFFFFFFF
"""Mask keeping arithmetic inside an unsigned 32-bit word."""

WORD_BITS = 32

COMBINE_MULTIPLIER = 37
"""Multiplier applied to every rotated topping hash before accumulation."""

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

StringHash = Callable[[str], int]
"""Signature of a stable 32-bit string hash."""


def fnv1a_32(text: str) -> int:
    """Return the 32-bit FNV-1a hash of the UTF-8 encoding of ``text``."""

    value = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * FNV_PRIME) & WORD_MASK
    return value


def java_string_hash(text: str) -> int:
    """Return ``String.hashCode`` semantics over UTF-16 code units, unsigned."""

    encoded = text.encode("utf-16-be")
    value = 0
    for index in range(0, len(encoded), 2):
        code_unit = (encoded[index] << 8) | encoded[index + 1]
        value = (31 * value + code_unit) & WORD_MASK
    return value


def rotate_left_32(value: int, amount: int) -> int:
    """Rotate ``value`` left by ``amount`` bits inside a 32-bit word.

    Bits leaving bit 31 re-enter at bit 0. ``amount`` is taken modulo 32 and a
    zero rotation returns the value untouched.
    """

    value &= WORD_MASK
    amount %= WORD_BITS
    if amount == 0:
        return value
    return ((value << amount) | (value >> (WORD_BITS - amount))) & WORD_MASK


def order_agnostic_hash(
    toppings: Iterable[str], string_hash: StringHash = fnv1a_32
) -> int:
    """
    Compute the permutation-invariant fingerprint of a topping multiset.

    Each topping's base hash is rotated by the number of times that same
    topping was already seen in this order, multiplied by 37, and summed
    modulo 2**32. An empty order hashes to 0.
    """

    accumulator = 0
    seen: dict[str, int] = {}
    for topping in toppings:
        occurrence = seen.get(topping, 0)
        seen[topping] = occurrence + 1
        rotated = rotate_left_32(string_hash(topping), occurrence)
        accumulator = (accumulator + rotated * COMBINE_MULTIPLIER) & WORD_MASK
    return accumulator


DEFAULT_HASH_NAME = "fnv1a"

HASH_REGISTRY: dict[str, StringHash] = {
    "fnv1a": fnv1a_32,
    "java": java_string_hash,
}
"""Registry enumerating the supported stable string hashes."""


def get_topping_hasher(name: str) -> StringHash:
    """Return the registered string hash for ``name`` (case-insensitive)."""

    hasher = HASH_REGISTRY.get(name.lower())
    if hasher is None:
        raise ValueError("Requested topping hash is not supported.")
    return hasher

