import pytest

from loginlog.core.security import get_hash_rounds, get_password_hash, hash_password_async, verify_password


def test_password_hashing():
    password = "testpassword123"
    hashed = get_password_hash(password, rounds=4)
    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password("wrongpassword", hashed)


def test_hash_encodes_cost_factor():
    hashed = get_password_hash("secret1", rounds=5)

    assert hashed.startswith("$2b$05$")
    assert get_hash_rounds(hashed) == 5


def test_hash_is_salted():
    assert get_password_hash("secret1", rounds=4) != get_password_hash("secret1", rounds=4)


@pytest.mark.asyncio
async def test_hash_password_async():
    hashed = await hash_password_async("secret1", rounds=4)

    assert verify_password("secret1", hashed)
