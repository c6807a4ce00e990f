from __future__ import annotations

import stat

import pytest

from netki.keys import KeyPair, load_key_pair, save_key_pair


def test_generated_keys_report_their_algorithm() -> None:
    ec_key = KeyPair.generate_secp256k1()
    rsa_key = KeyPair.generate_rsa()

    assert ec_key.is_secp256k1 is True
    assert ec_key.is_rsa is False
    assert rsa_key.is_rsa is True
    assert rsa_key.is_secp256k1 is False


def test_save_and_load_key_pair(tmp_path, ec_key: KeyPair) -> None:
    path = save_key_pair(ec_key, tmp_path / "keys" / "user.pem")

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert stat.S_IMODE(path.parent.stat().st_mode) == 0o700

    loaded = load_key_pair(path)
    assert loaded.is_secp256k1
    assert loaded.public_der() == ec_key.public_der()


def test_save_and_load_encrypted_key_pair(tmp_path, rsa_key: KeyPair) -> None:
    path = save_key_pair(rsa_key, tmp_path / "rsa.pem", password=b"hunter2")

    assert b"ENCRYPTED" in path.read_bytes()
    assert load_key_pair(path, password=b"hunter2").public_der() == rsa_key.public_der()


def test_load_missing_key_pair(tmp_path) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_key_pair(tmp_path / "missing.pem")


def test_load_invalid_key_pair(tmp_path) -> None:
    path = tmp_path / "bad.pem"
    path.write_text("not a key", encoding="utf-8")

    with pytest.raises(ValueError, match="Failed to parse"):
        load_key_pair(path)
