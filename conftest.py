"""
Test settings.

Configured here instead of through config.settings so the suite runs
without a .env file or any SECRET_KEY/DEBUG in the environment.
"""
from django.conf import settings

# Hardhat/Anvil account #0, a public test key, never used on a real network
TEST_SIGNER_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'


def pytest_configure():
  settings.configure(
    SECRET_KEY='test-secret-key',
    DEBUG=False,
    ALLOWED_HOSTS=['testserver'],
    INSTALLED_APPS=['api'],
    MIDDLEWARE=[
      'middleware.wide_event_logging.WideEventLoggingMiddleware',
      'middleware.cors.CorsMiddleware',
      'django.middleware.common.CommonMiddleware',
    ],
    ROOT_URLCONF='config.urls',
    DATABASES={},
    USE_TZ=True,
    GATEWAY_SIGNER_KEY=TEST_SIGNER_KEY,
    GATEWAY_VERIFYING_CONTRACT='',
    GATEWAY_PARENT_DOMAIN='onsui.eth',
    GATEWAY_NATIVE_SUFFIX='sui',
    GATEWAY_RESPONSE_TTL=300,
    SUI_RPC_URL='http://sui.invalid',
    SUI_RPC_TIMEOUT=1,
    SUINS_REGISTRY_TABLE_ID='0x' + '11' * 32,
    SUINS_DOMAIN_TYPE='0x' + '22' * 32 + '::domain::Domain',
  )
