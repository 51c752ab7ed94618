import hashlib

from tinyfeed.core.hashing import hash_write_key, verify_write_key


def test_hash_is_salted():
    first = hash_write_key("secretkey123")
    second = hash_write_key("secretkey123")
    assert first != second
    assert verify_write_key("secretkey123", first)
    assert verify_write_key("secretkey123", second)


def test_hash_records_its_parameters():
    scheme, n, r, p, salt, digest = hash_write_key("secretkey123", n=32, r=2, p=1).split("$")
    assert (scheme, n, r, p) == ("scrypt", "32", "2", "1")
    assert len(bytes.fromhex(salt)) == 16
    assert len(bytes.fromhex(digest)) == 32


def test_wrong_key_fails():
    stored = hash_write_key("secretkey123")
    assert not verify_write_key("secretkey124", stored)
    assert not verify_write_key("", stored)


def test_unsalted_sha256_hash_is_not_accepted():
    unsalted = hashlib.sha256(b"secretkey123").hexdigest()
    assert not verify_write_key("secretkey123", unsalted)


def test_invalid_cost_parameters_never_verify():
    stored = hash_write_key("secretkey123", n=16, r=1, p=1)
    _, _, r, p, salt, digest = stored.split("$")
    # N must be a power of two
    assert not verify_write_key("secretkey123", f"scrypt$15${r}${p}${salt}${digest}")
    assert not verify_write_key("secretkey123", f"scrypt$0${r}${p}${salt}${digest}")


def test_garbage_hash_never_verifies():
    assert not verify_write_key("secretkey123", "")
    assert not verify_write_key("secretkey123", "scrypt$x$y$z$00$00")
    assert not verify_write_key("secretkey123", "plaintext")
