import pytest
from django.apps import apps

from api.tests.fakes import CIDV0, SUI_ADDRESS, TEST_SIGNER_KEY, FakeProvider
from api.utils.ens_signer import ResponseSigner
from api.utils.gateway import Gateway
from api.utils.resolver import QueryResolver
from api.utils.suins_client import NameRecord


@pytest.fixture
def bob_record():
  return NameRecord(
    target_address=SUI_ADDRESS,
    avatar='https://example.com/bob.png',
    content_hash=CIDV0,
    walrus_site_id='0x' + 'cd' * 32,
  )


@pytest.fixture
def provider(bob_record):
  return FakeProvider({'bob.sui': bob_record})


@pytest.fixture
def signer():
  return ResponseSigner(TEST_SIGNER_KEY, ttl=300)


@pytest.fixture
def gateway(provider, signer):
  return Gateway(QueryResolver(provider, parent_domain='onsui.eth'), signer)


@pytest.fixture
def installed_gateway(gateway, monkeypatch):
  """Swap the app's shared gateway for one backed by the fake provider."""
  monkeypatch.setattr(apps.get_app_config('api'), 'gateway', gateway)
  return gateway
