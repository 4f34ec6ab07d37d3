"""
Tests for HD node construction and SLIP-0010 derivation.
"""

from __future__ import annotations

import dataclasses
import hashlib

import pytest

from pokthd.bip39 import mnemonic_to_seed
from pokthd.crypto import HARDENED_BIT, hash160
from pokthd.errors import (
    DepthOverflow,
    ErrorKind,
    InvalidChecksum,
    InvalidMnemonic,
    InvalidPath,
    InvalidSeed,
    NeuteredDerivationError,
)
from pokthd.hdnode import ZERO_FINGERPRINT, HDNode

# SLIP-0010 ed25519 test vector 1: path -> (chain code, private key, public key)
SLIP10_VECTOR_1 = {
    "m/0'/1'": (
        "a320425f77d1b5c2505a6b1b27382b37368ee640e3557c315416801243552f14",
        "b1d0bad404bf35da785a64ca1ac54b2617211d2777696fbffaf208f746ae84f2",
        "1932a5270f335bed617d5b935c80aedb1a35bd9fc1e31acafd5372c30f5c1187",
    ),
    "m/0'/1'/2'": (
        "2e69929e00b5ab250f49c3fb1c12f252de4fed2c1db88387094a0f8c4c9ccd6c",
        "92a5b23c0b8a99e37d07df3fb9966917f5d06e02ddbd909c7e184371463e9fc9",
        "ae98736566d30ed0e9d2f4486a64bc95740d89c7db33f52121f8ea8f76ff0fc1",
    ),
    "m/0'/1'/2'/2'": (
        "8f6d87f93d750e0efccda017d662a1b31a266e4a6f5993b15f5c1f07f74dd5cc",
        "30d1dc7e5fc04c31219ab25a27ae00b50f6fd66622f6e9c913253d6511d1e662",
        "8abae2d66361c879b900d204ad2cc4984fa2aa344dd7ddc46007329ac76c429c",
    ),
    "m/0'/1'/2'/2'/1000000000'": (
        "68789923a0cac2cd5a29172a475fe9e0fb14cd6adb5ad98a3fa70333e7afa230",
        "8f94d394a8e8fd6b1bc2f3f49f5c47e385281d5c17e65324b0f62483e37e8793",
        "3c24da049451555d51a7014a37337aa4e12d41e485abccfa46b47dfb2af54b7a",
    ),
}

POCKET_PATH = "m/44'/635'/0'/0/0"

# Root and leaf of the abandon ... about phrase, empty passphrase
ROOT_FINGERPRINT = "8ec3bbf1"
LEAF_PUBLIC_KEY = "148e6139f8780d8fd4ceaab13803f0856efdde33ca8d0da8619f1312178bd1b6"
LEAF_ADDRESS = "aa9b781ddffebfa6767f08d199b8ad53735e8b9e"


# =============================================================================
# Construction
# =============================================================================


def test_from_seed(slip10_seed):
    root = HDNode.from_seed(slip10_seed)

    assert root.depth == 0
    assert root.index == 0
    assert root.parent_fingerprint == ZERO_FINGERPRINT
    assert root.path == "m"
    assert root.mnemonic is None
    assert root.private_key.hex() == (
        "2b4be7f19ee27bbf30c667b642d5f4aa69fd169872f8fc3059c08ebae2eb19e7"
    )
    assert root.public_key.hex() == (
        "a4b2856bfec510abab89753fac1ac0e1112364e7d250545963f135f2a33188ed"
    )


@pytest.mark.parametrize("length", [0, 15, 65, 128])
def test_from_seed_invalid_length(length):
    with pytest.raises(InvalidSeed) as exc_info:
        HDNode.from_seed(b"\x01" * length)
    assert exc_info.value.kind is ErrorKind.INVALID_SEED


@pytest.mark.parametrize("length", [16, 32, 64])
def test_from_seed_accepted_lengths(length):
    assert HDNode.from_seed(b"\x01" * length).depth == 0


def test_from_mnemonic(test_mnemonic):
    root = HDNode.from_mnemonic(test_mnemonic)

    assert root == HDNode.from_seed(mnemonic_to_seed(test_mnemonic), mnemonic=root.mnemonic)
    assert root.mnemonic.phrase == test_mnemonic
    assert root.mnemonic.path == "m"
    assert root.mnemonic.locale == "en"


def test_from_mnemonic_normalizes_phrase(test_mnemonic):
    messy = "  " + test_mnemonic.upper().replace(" ", "  ")
    assert HDNode.from_mnemonic(messy) == HDNode.from_mnemonic(test_mnemonic)


def test_from_mnemonic_passphrase(test_mnemonic):
    plain = HDNode.from_mnemonic(test_mnemonic)
    protected = HDNode.from_mnemonic(test_mnemonic, "TREZOR")
    assert plain.public_key != protected.public_key


def test_from_mnemonic_errors_propagate(test_mnemonic):
    with pytest.raises(InvalidChecksum):
        HDNode.from_mnemonic(" ".join(["abandon"] * 12))
    with pytest.raises(InvalidMnemonic):
        HDNode.from_mnemonic("abandon abandon")


def test_direct_construction_validates():
    root = HDNode.from_seed(b"\x07" * 32)

    with pytest.raises(ValueError):
        dataclasses.replace(root, chain_code=b"\x00" * 31)
    with pytest.raises(ValueError):
        dataclasses.replace(root, public_key=b"\x00" * 32)
    with pytest.raises(DepthOverflow):
        dataclasses.replace(root, depth=256)


# =============================================================================
# Derivation
# =============================================================================


@pytest.mark.parametrize("path", sorted(SLIP10_VECTOR_1))
def test_slip10_vector_1(slip10_seed, path):
    chain_code, private_key, public_key = SLIP10_VECTOR_1[path]

    node = HDNode.from_seed(slip10_seed).derive_path(path)

    assert node.chain_code.hex() == chain_code
    assert node.private_key.hex() == private_key
    assert node.public_key.hex() == public_key


def test_child_fields(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    child = root.derive_child(1)

    assert child.depth == 1
    assert child.index == 1
    assert child.hardened_index == 1 | HARDENED_BIT
    assert child.parent_fingerprint == root.fingerprint
    assert child.path == "m/1'"


def test_derivation_is_deterministic(test_mnemonic):
    first = HDNode.from_mnemonic(test_mnemonic).derive_path(POCKET_PATH)
    second = HDNode.from_mnemonic(test_mnemonic).derive_path(POCKET_PATH)
    assert first == second


def test_absolute_path_equals_chained_steps(test_mnemonic):
    root = HDNode.from_mnemonic(test_mnemonic)

    chained = root
    for index in (44, 635, 0, 0, 0):
        chained = chained.derive_child(index)

    assert root.derive_child(POCKET_PATH) == chained
    assert root.derive_child("44'/635'/0'/0/0") == chained


def test_unmarked_segments_are_hardened(test_mnemonic):
    root = HDNode.from_mnemonic(test_mnemonic)
    assert root.derive_path("m/44/635/0/0/0") == root.derive_path("m/44'/635h/0H/0'/0'")


def test_digit_string_is_single_step(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    assert root.derive_child("7") == root.derive_child(7)


def test_absolute_path_must_extend_node_path(test_mnemonic):
    account = HDNode.from_mnemonic(test_mnemonic).derive_path("m/44'/635'/0'")

    leaf = account.derive_child("m/44'/635'/0'/0/0")
    assert leaf.path == "m/44'/635'/0'/0'/0'"
    assert leaf.depth == 5

    with pytest.raises(InvalidPath):
        account.derive_child("m/44'/635'/1'/0/0")


def test_absolute_path_naming_no_child(test_mnemonic):
    root = HDNode.from_mnemonic(test_mnemonic)
    account = root.derive_path("m/44'/635'/0'")

    with pytest.raises(InvalidPath):
        root.derive_child("m")
    with pytest.raises(InvalidPath):
        account.derive_child(account.path)


def test_absolute_path_without_provenance(slip10_seed):
    node = HDNode.from_extended_key(HDNode.from_seed(slip10_seed).extended_key)

    with pytest.raises(InvalidPath):
        node.derive_child("m/0")

    child = node.derive_child("0'")
    assert child.path is None
    assert child.private_key.hex() == (
        "68e0fe46dfb67e368c75379acec591dad19df3cde26e63b93a8e704f1dade7a3"
    )


@pytest.mark.parametrize("bad", ["m/x", "0//1", "", HARDENED_BIT, -1, 1.5, None])
def test_invalid_child_argument(slip10_seed, bad):
    with pytest.raises(InvalidPath):
        HDNode.from_seed(slip10_seed).derive_child(bad)


def test_depth_increases_by_one_per_step(slip10_seed):
    node = HDNode.from_seed(slip10_seed)
    for expected_depth in range(1, 6):
        node = node.derive_child(0)
        assert node.depth == expected_depth


def test_depth_overflow(slip10_seed):
    deep = dataclasses.replace(HDNode.from_seed(slip10_seed), depth=255)

    with pytest.raises(DepthOverflow) as exc_info:
        deep.derive_child(0)
    assert exc_info.value.kind is ErrorKind.DEPTH_OVERFLOW


def test_parent_is_unchanged_by_derivation(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    snapshot = dataclasses.replace(root)

    root.derive_path("m/1/2/3")

    assert root == snapshot


def test_mnemonic_provenance_follows_path(test_mnemonic):
    node = HDNode.from_mnemonic(test_mnemonic).derive_path(POCKET_PATH)

    assert node.mnemonic.phrase == test_mnemonic
    assert node.mnemonic.path == node.path == "m/44'/635'/0'/0'/0'"


# =============================================================================
# Neutering
# =============================================================================


def test_neuter(test_mnemonic):
    node = HDNode.from_mnemonic(test_mnemonic).derive_path(POCKET_PATH)
    public = node.neuter()

    assert public.is_neutered
    assert not node.is_neutered
    assert public.private_key is None
    assert public.mnemonic is None
    assert public.secret_key is None
    assert public.public_key == node.public_key
    assert public.chain_code == node.chain_code
    assert public.fingerprint == node.fingerprint
    assert public.path == node.path
    assert public.neuter() == public


def test_neutered_node_cannot_derive(slip10_seed):
    public = HDNode.from_seed(slip10_seed).neuter()

    with pytest.raises(NeuteredDerivationError) as exc_info:
        public.derive_child(0)
    assert exc_info.value.kind is ErrorKind.NEUTERED_DERIVATION


def test_neutered_node_cannot_step(slip10_seed):
    public = HDNode.from_seed(slip10_seed).neuter()

    with pytest.raises(NeuteredDerivationError):
        public._derive_step(0)


# =============================================================================
# Derived properties
# =============================================================================


def test_fingerprint_and_address(test_mnemonic):
    root = HDNode.from_mnemonic(test_mnemonic)
    node = root.derive_path(POCKET_PATH)

    assert root.fingerprint.hex() == ROOT_FINGERPRINT
    assert node.public_key.hex() == LEAF_PUBLIC_KEY
    assert node.address == LEAF_ADDRESS
    assert node.fingerprint == hash160(node.public_key)[:4]
    assert node.address == hashlib.sha256(node.public_key).digest()[:20].hex()


def test_child_parent_fingerprint(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    child = root.derive_child("0'")

    assert child.parent_fingerprint == root.fingerprint
    assert child.parent_fingerprint == hash160(root.public_key)[:4]
    assert child.parent_fingerprint != ZERO_FINGERPRINT


def test_secret_key(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    assert root.secret_key == root.private_key + root.public_key
    assert len(root.secret_key) == 64


def test_repr_hides_secrets(test_mnemonic):
    node = HDNode.from_mnemonic(test_mnemonic)
    text = repr(node)

    assert repr(node.private_key) not in text
    assert node.private_key.hex() not in text
    assert "abandon" not in text


def test_nodes_are_frozen(slip10_seed):
    root = HDNode.from_seed(slip10_seed)
    with pytest.raises(dataclasses.FrozenInstanceError):
        root.depth = 3


def test_to_dict(test_mnemonic):
    node = HDNode.from_mnemonic(test_mnemonic).derive_path(POCKET_PATH)

    public = node.to_dict()
    assert public["path"] == "m/44'/635'/0'/0'/0'"
    assert public["depth"] == 5
    assert public["address"] == node.address
    assert public["xpub"].startswith("xpub")
    assert "private_key" not in public
    assert "xprv" not in public

    private = node.to_dict(include_private=True)
    assert private["private_key"] == node.private_key.hex()
    assert private["xprv"] == node.extended_key
