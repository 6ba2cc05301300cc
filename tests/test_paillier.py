import secrets

import pytest

from paillierkit.crypto.ciphertext import BlindingState, encrypt
from paillierkit.crypto.decryption import DecryptionAlgorithm, decrypt
from paillierkit.crypto.keys import generate_keypair
from paillierkit.crypto.paillier import Paillier
from paillierkit.errors import InvalidCiphertext, InvalidKeyMaterial

ALGORITHMS = list(DecryptionAlgorithm)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_encrypt_decrypt_roundtrip(pub, priv, algorithm):
    for msg in [0, 1, 5, 42, pub.n - 1]:
        c = encrypt(msg, pub)
        assert decrypt(c.value, priv, pub, algorithm) == msg


def test_algorithms_agree_on_random_plaintexts(pub, priv):
    for _ in range(20):
        c = encrypt(secrets.randbelow(pub.n), pub).value
        assert decrypt(c, priv, pub, "direct") == decrypt(c, priv, pub, "crt_fast")


def test_algorithms_agree_on_foreign_ciphertext_values(pub, priv):
    # any unit mod n^2 is a valid ciphertext, not only ones produced by encrypt
    for _ in range(5):
        c = encrypt(0, pub).add_ciphertext(secrets.randbelow(pub.n_sq - 2) + 2).value
        assert decrypt(c, priv, pub, DecryptionAlgorithm.DIRECT) == decrypt(
            c, priv, pub, DecryptionAlgorithm.CRT_FAST
        )


def test_homomorphic_addition(pub, priv):
    a, b = 1234, 5678
    c = encrypt(a, pub).add_ciphertext(encrypt(b, pub).value)
    assert decrypt(c.value, priv, pub) == a + b


def test_addition_wraps_modulo_n(pub, priv):
    c = encrypt(pub.n - 1, pub).add(encrypt(5, pub))
    assert decrypt(c.value, priv, pub) == 4


def test_homomorphic_subtraction(pub, priv):
    c = encrypt(100, pub).subtract_ciphertext(encrypt(58, pub).value)
    assert decrypt(c.value, priv, pub) == 42


def test_subtraction_below_zero_wraps(pub, priv):
    a, b = 3, 10
    c = encrypt(a, pub).subtract(encrypt(b, pub))
    assert decrypt(c.value, priv, pub, "crt_fast") == pub.n + (a - b)


def test_scalar_add_and_subtract(pub, priv):
    assert decrypt(encrypt(40, pub).add(2).value, priv, pub) == 42
    assert decrypt(encrypt(44, pub).subtract(2).value, priv, pub) == 42


def test_scalar_multiply(pub, priv):
    assert decrypt(encrypt(21, pub).multiply(2).value, priv, pub) == 42
    assert decrypt(encrypt(21, pub).multiply(0).value, priv, pub) == 0
    assert decrypt(encrypt(21, pub).multiply(-1).value, priv, pub) == pub.n - 21


def test_same_plaintext_encrypts_differently(pub, priv):
    c1 = encrypt(7, pub).value
    c2 = encrypt(7, pub).value
    assert c1 != c2
    assert decrypt(c1, priv, pub) == decrypt(c2, priv, pub) == 7


def test_simple_operations_chain(pub, priv):
    value = 12345678
    c = encrypt(value, pub)

    c.add(2)
    c.add_ciphertext(encrypt(8, pub).value)
    c.subtract(8)
    c.subtract_ciphertext(encrypt(2, pub).value)
    c.multiply(2)

    assert decrypt(c.value, priv, pub, DecryptionAlgorithm.CRT_FAST) == value * 2


def test_operators_chain_and_return_receiver(pub):
    c = encrypt(1, pub)
    assert c.add(1).subtract(1).multiply(3) is c


def test_paillier_object_roundtrip(key_pair):
    scheme = Paillier(key_pair=key_pair)
    c = scheme.encrypt(99).add(1)
    assert scheme.decrypt(c) == 100
    assert scheme.decrypt(c.value, DecryptionAlgorithm.CRT_FAST) == 100
    assert scheme.decrypt(scheme.ciphertext(c.value)) == 100


def test_paillier_object_generates_its_own_key():
    scheme = Paillier(strength=128)
    assert scheme.public_key.bits in (127, 128)
    assert scheme.decrypt(scheme.encrypt(5)) == 5


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_decrypt_does_not_blind_or_change_the_handle(pub, priv, algorithm):
    c = encrypt(5, pub).add(3)
    before = c.raw_value()

    assert decrypt(c, priv, pub, algorithm) == 8

    assert c.state is BlindingState.UNBLINDED
    assert c.raw_value() == before


def test_decrypt_rejects_mismatched_key_halves(key_pair):
    other = generate_keypair(128)
    c = encrypt(1, key_pair.public_key).value
    with pytest.raises(InvalidKeyMaterial):
        decrypt(c, other.private_key, key_pair.public_key)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_decrypt_rejects_value_outside_ciphertext_space(pub, priv, algorithm):
    with pytest.raises(InvalidCiphertext):
        decrypt(pub.n_sq, priv, pub, algorithm)
    with pytest.raises(InvalidCiphertext):
        decrypt(-1, priv, pub, algorithm)


def test_decrypt_rejects_unknown_algorithm_name(pub, priv):
    c = encrypt(1, pub).value
    with pytest.raises(ValueError):
        decrypt(c, priv, pub, "rsa")


def test_paillier_object_keeps_strength_validation():
    with pytest.raises(ValueError):
        Paillier(strength=0)
