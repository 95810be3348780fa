from trip_planner.services.passwords import hash_password, verify_password


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("correct horse")
    second = hash_password("correct horse")

    assert "correct horse" not in first
    assert first != second
    assert first.startswith("$2")


def test_verify_password():
    stored = hash_password("correct horse")

    assert verify_password("correct horse", stored)
    assert not verify_password("Correct horse", stored)


def test_verify_rejects_malformed_hash():
    assert not verify_password("whatever1", "not-a-bcrypt-hash")


def test_long_passwords_do_not_raise():
    long_password = "x" * 100
    stored = hash_password(long_password)
    assert verify_password(long_password, stored)
