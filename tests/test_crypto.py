"""Entity secret generation and RSA-OAEP encryption tests."""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from circle_wallets import crypto
from circle_wallets.crypto import (
    encrypt_entity_secret,
    expected_ciphertext_length,
    generate_entity_secret,
    load_rsa_public_key,
)
from circle_wallets.errors import CircleArgumentError, EntitySecretCryptoError
from circle_wallets.validation import is_valid_secret_format

from tests.conftest import ENTITY_SECRET, PUBLIC_KEY_PEM, decrypt_ciphertext


def _public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


class TestGenerateEntitySecret:
    def test_is_64_lowercase_hex(self):
        secret = generate_entity_secret()
        assert len(secret) == 64
        assert secret == secret.lower()
        assert is_valid_secret_format(secret)
        assert len(bytes.fromhex(secret)) == 32

    def test_secrets_are_unique(self):
        secrets = {generate_entity_secret() for _ in range(100)}
        assert len(secrets) == 100


class TestExpectedCiphertextLength:
    def test_2048_bit_key(self):
        assert expected_ciphertext_length(2048) == 344

    def test_4096_bit_key(self):
        assert expected_ciphertext_length(4096) == 684


class TestLoadRsaPublicKey:
    def test_accepts_str_and_bytes(self):
        assert load_rsa_public_key(PUBLIC_KEY_PEM).key_size == 2048
        assert load_rsa_public_key(PUBLIC_KEY_PEM.encode()).key_size == 2048

    def test_empty_key(self):
        with pytest.raises(EntitySecretCryptoError, match="missing"):
            load_rsa_public_key("")

    def test_malformed_pem(self):
        with pytest.raises(EntitySecretCryptoError, match="Failed to import"):
            load_rsa_public_key("-----BEGIN PUBLIC KEY-----\nnot a key\n-----END PUBLIC KEY-----\n")

    def test_rejects_non_rsa_key(self):
        pem = _public_pem(ec.generate_private_key(ec.SECP256R1()))
        with pytest.raises(EntitySecretCryptoError, match="must be RSA"):
            load_rsa_public_key(pem)


class TestEncryptEntitySecret:
    def test_round_trip(self):
        ciphertext = encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM)
        assert decrypt_ciphertext(ciphertext) == ENTITY_SECRET

    def test_uppercase_secret_decodes_to_same_bytes(self):
        ciphertext = encrypt_entity_secret(ENTITY_SECRET.upper(), PUBLIC_KEY_PEM)
        assert decrypt_ciphertext(ciphertext) == ENTITY_SECRET

    def test_ciphertext_is_base64_of_modulus_length(self):
        ciphertext = encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM)
        assert len(ciphertext) == 344
        assert len(base64.b64decode(ciphertext)) == 256

    def test_ciphertexts_differ_per_call(self):
        first = encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM)
        second = encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM)
        assert first != second
        assert decrypt_ciphertext(first) == decrypt_ciphertext(second) == ENTITY_SECRET

    def test_other_key_sizes_pass_strict_check(self):
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=3072)
        ciphertext = encrypt_entity_secret(ENTITY_SECRET, _public_pem(private_key))
        assert len(ciphertext) == expected_ciphertext_length(3072)
        assert decrypt_ciphertext(ciphertext, private_key) == ENTITY_SECRET

    @pytest.mark.parametrize(
        "secret",
        ["", "a1" * 31 + "a", "a1" * 32 + "a", "g" + "a" * 63, None],
    )
    def test_rejects_malformed_secret(self, secret):
        with pytest.raises(CircleArgumentError, match="32-byte hex string"):
            encrypt_entity_secret(secret, PUBLIC_KEY_PEM)

    def test_strict_length_mismatch(self, monkeypatch):
        monkeypatch.setattr(crypto, "expected_ciphertext_length", lambda key_size: 684)
        with pytest.raises(EntitySecretCryptoError, match=r"length \(344\)"):
            encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM)

    def test_non_strict_skips_length_check(self, monkeypatch):
        monkeypatch.setattr(crypto, "expected_ciphertext_length", lambda key_size: 684)
        ciphertext = encrypt_entity_secret(ENTITY_SECRET, PUBLIC_KEY_PEM, strict=False)
        assert decrypt_ciphertext(ciphertext) == ENTITY_SECRET
