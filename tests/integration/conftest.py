"""
Sandbox Fixtures for Integration Tests

Run against the MTN MoMo developer sandbox. Requires:
    MTN_MOMO_SANDBOX_SUBSCRIPTION_KEY, MTN_MOMO_SANDBOX_API_USER,
    MTN_MOMO_SANDBOX_API_KEY
and optionally MTN_MOMO_SANDBOX_PRODUCT (default: disbursement).

Skips tests if the variables are not set.
"""

import pytest

from mtn_momo import ConfigurationError, MomoCredentials


@pytest.fixture(scope="session")
def sandbox_credentials():
    try:
        credentials = MomoCredentials.from_env(prefix="MTN_MOMO_SANDBOX_")
    except ConfigurationError as e:
        pytest.skip(str(e))
    if credentials.environment != "sandbox":
        pytest.skip("Integration tests only run against the sandbox")
    return credentials


@pytest.fixture
def sandbox_msisdn():
    """Sandbox test number that always succeeds"""
    return "46733123453"
