"""
Test bootstrap:
- Make src/ importable when the package is not installed
- Provide shared keyring fixtures
"""
import sys
import pathlib

import pytest

SRC = pathlib.Path(__file__).resolve().parent.parent / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def single_keyring():
    """SingleKeyring for private key 1 at its derived address."""
    from helpers import mk_single_keyring
    return mk_single_keyring(1)


@pytest.fixture
def multiple_keyring():
    """MultipleKeyring with three deterministic keys."""
    from helpers import mk_multiple_keyring
    return mk_multiple_keyring(3)


@pytest.fixture
def role_based_keyring():
    """RoleBasedKeyring with 2/1/1 keys per role."""
    from helpers import mk_role_based_keyring
    return mk_role_based_keyring((2, 1, 1))
