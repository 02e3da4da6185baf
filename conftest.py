"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under vatsim_sso/, making its
fixtures available everywhere.
"""

import os

import pytest

# ---------------------------------------------------------------------------
# Environment variables: keep developer shells from leaking into settings.
# ---------------------------------------------------------------------------
for _name in [k for k in os.environ if k.startswith("VATSIM_SSO_")]:
    del os.environ[_name]


BASE_URL = "https://sso.example.net/sso/"


# ---------------------------------------------------------------------------
# Shared fakes and settings
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that returns seeded bodies and records calls."""
    from vatsim_sso.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def sso_settings():
    """Settings for consumer ``abc`` / ``shh`` without a signature method."""
    from vatsim_sso.core.config import SsoSettings

    return SsoSettings(
        base_url=BASE_URL,
        api_path="api/",
        login_token_path="login_token/",
        user_data_path="login_return/",
        redirect_path="auth/pre_login/?oauth_token=",
        consumer_key="abc",
        consumer_secret="shh",
    )


@pytest.fixture(scope="session")
def rsa_private_key():
    """A throwaway 2048-bit RSA key."""
    from cryptography.hazmat.primitives.asymmetric import rsa

    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_key_pem(rsa_private_key):
    """PEM text of ``rsa_private_key``."""
    from cryptography.hazmat.primitives import serialization

    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
