import pytest


@pytest.fixture
def secret_key() -> str:
    return "test-secret-key-that-is-long-enough-for-hs256-hs384-and-hs512-too"


@pytest.fixture
def other_key() -> str:
    return "another-secret-key-that-is-long-enough-for-every-hmac-variant-too"
