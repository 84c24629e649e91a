"""Tests for the HTTP surface: /lookup, /health, CORS and error mapping."""
import json

import pytest
from django.apps import apps
from eth_abi import decode

from api.tests.fakes import SENDER, SUI_ADDRESS, TEST_SIGNER_ADDRESS
from api.utils.ens_codec import (
  decode_gateway_response,
  encode_addr_call,
  encode_resolve_request,
  encode_text_call,
)
from api.utils.ens_signer import ResponseSigner, make_message_hash, recover_signer
from api.utils.gateway import Gateway
from api.utils.resolver import QueryResolver


def _lookup_url(sender, request_data: bytes) -> str:
  return f'/lookup/{sender}/0x{request_data.hex()}.json'


def test_app_builds_gateway_from_settings():
  gateway = apps.get_app_config('api').gateway

  assert isinstance(gateway, Gateway)
  assert gateway.signer.address == TEST_SIGNER_ADDRESS
  assert gateway.signer.ttl == 300
  assert gateway.resolver.parent_domain == 'onsui.eth'
  assert gateway.verifying_contract is None


@pytest.mark.usefixtures('installed_gateway')
class TestCcipRead:

  def test_addr_lookup(self, client):
    name = 'bob.onsui.eth'
    request_data = encode_resolve_request(name, encode_addr_call(name, 784))

    response = client.get(_lookup_url(SENDER, request_data))

    assert response.status_code == 200
    result, expires, signature = decode_gateway_response(bytes.fromhex(response.json()['data'][2:]))
    assert decode(['bytes'], result) == (SUI_ADDRESS,)
    message_hash = make_message_hash(SENDER, expires, request_data, result)
    assert recover_signer(message_hash, signature) == TEST_SIGNER_ADDRESS

  def test_text_lookup(self, client):
    name = 'bob.onsui.eth'
    request_data = encode_resolve_request(name, encode_text_call(name, 'avatar'))

    response = client.get(_lookup_url(SENDER, request_data))

    result, _, _ = decode_gateway_response(bytes.fromhex(response.json()['data'][2:]))
    assert decode(['string'], result) == ('https://example.com/bob.png',)

  def test_cors_headers(self, client):
    name = 'bob.onsui.eth'
    request_data = encode_resolve_request(name, encode_addr_call(name, 784))

    response = client.get(_lookup_url(SENDER, request_data))
    assert response['Access-Control-Allow-Origin'] == '*'

  def test_invalid_sender(self, client):
    response = client.get('/lookup/0x1234/0xdeadbeef.json')

    assert response.status_code == 400
    assert response.json()['error'] == 'INVALID_REQUEST'

  def test_malformed_data(self, client):
    response = client.get(f'/lookup/{SENDER}/0x9061b9230000.json')

    assert response.status_code == 400
    assert response.json()['error'] == 'DECODE_ERROR'

  def test_unsupported_function(self, client):
    name = 'bob.onsui.eth'
    request_data = encode_resolve_request(name, bytes.fromhex('3b3b57de') + b'\x00' * 32)

    response = client.get(_lookup_url(SENDER, request_data))

    assert response.status_code == 400
    assert response.json()['error'] == 'UNSUPPORTED_QUERY'

  def test_wrong_parent_domain(self, client):
    name = 'bob.other.eth'
    request_data = encode_resolve_request(name, encode_addr_call(name, 784))

    response = client.get(_lookup_url(SENDER, request_data))

    assert response.status_code == 400
    assert response.json()['error'] == 'DOMAIN_MISMATCH'

  def test_post_not_allowed(self, client):
    response = client.post(f'/lookup/{SENDER}/0x.json')
    assert response.status_code == 405


def test_signing_failure_is_server_error(client, provider, monkeypatch):
  unsigned = Gateway(QueryResolver(provider, parent_domain='onsui.eth'), ResponseSigner(''))
  monkeypatch.setattr(apps.get_app_config('api'), 'gateway', unsigned)
  name = 'bob.onsui.eth'
  request_data = encode_resolve_request(name, encode_addr_call(name, 784))

  response = client.get(_lookup_url(SENDER, request_data))

  assert response.status_code == 500
  body = response.json()
  assert body['error'] == 'SIGNING_ERROR'
  assert 'data' not in body


def test_unexpected_error_is_server_error(client, monkeypatch):
  class ExplodingResolver:
    async def resolve(self, query):
      raise RuntimeError('boom')

  broken = Gateway(ExplodingResolver(), ResponseSigner(''))
  monkeypatch.setattr(apps.get_app_config('api'), 'gateway', broken)
  name = 'bob.onsui.eth'
  request_data = encode_resolve_request(name, encode_addr_call(name, 784))

  response = client.get(_lookup_url(SENDER, request_data))

  assert response.status_code == 500
  assert response.json() == {'error': 'INTERNAL_ERROR', 'message': 'Unable to resolve'}


def test_health(client):
  response = client.get('/health')

  assert response.status_code == 200
  assert response.json() == {'status': 'ok', 'service': 'suins-ens-gateway'}
  assert response['Access-Control-Allow-Origin'] == '*'


def test_unknown_route(client):
  response = client.get('/nope')

  assert response.status_code == 404
  assert response.json()['error'] == 'NOT_FOUND'


def test_preflight(client):
  response = client.options(f'/lookup/{SENDER}/0x.json')

  assert response.status_code == 204
  assert response['Access-Control-Allow-Methods'] == 'GET, OPTIONS'


def test_wide_event_logged(client, caplog):
  with caplog.at_level('INFO', logger='wide_event'):
    client.get('/health')

  events = [json.loads(r.getMessage()) for r in caplog.records if r.name == 'wide_event']
  assert events[-1]['path'] == '/health'
  assert events[-1]['status'] == 200


@pytest.mark.usefixtures('installed_gateway')
def test_wide_event_carries_lookup_details(client, caplog):
  name = 'bob.onsui.eth'
  request_data = encode_resolve_request(name, encode_text_call(name, 'avatar'))

  with caplog.at_level('INFO', logger='wide_event'):
    client.get(_lookup_url(SENDER, request_data))

  events = [
    json.loads(r.getMessage()) for r in caplog.records
    if r.name == 'wide_event' and r.getMessage().startswith('{')
  ]
  extra = events[-1]['extra']
  assert extra['ens_name'] == name
  assert extra['ens_function'] == 'text'
  assert isinstance(extra['ens_expires'], int)
