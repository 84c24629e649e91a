"""
SuiNS name-record provider.

Reads a SuiNS NameRecord straight from the Sui fullnode JSON-RPC: every
registered domain is a dynamic field of the SuiNS registry table, keyed by
the domain's labels in reverse order ('alice.sui' → ['sui', 'alice']).

Lookups never raise. The outcome is one of Found / NotFound /
ProviderFailure so callers can tell a missing name from an outage.
"""
import http.client
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass

from asgiref.sync import sync_to_async

logger = logging.getLogger('wide_event')

SUI_MAINNET_RPC_URL = 'https://fullnode.mainnet.sui.io:443'

# SuiNS mainnet registry table + Domain key type (from @mysten/suins constants)
SUINS_REGISTRY_TABLE_ID = '0xe64cd9db9f829c6cc405d9790bd71567ae07259855f4fba6f02c84f52298c106'
SUINS_DOMAIN_TYPE = (
  '0xd22b24490e0bae52676651b4f56660a5ff8022a2576e0089f79b3c88d44e08f0::domain::Domain'
)

# Keys of the NameRecord data VecMap we expose
AVATAR_KEY = 'avatar'
CONTENT_HASH_KEY = 'content_hash'
WALRUS_SITE_ID_KEY = 'walrus_site_id'


@dataclass(frozen=True)
class NameRecord:
  """The slice of a SuiNS NameRecord the gateway serves."""
  target_address: bytes | None = None
  avatar: str | None = None
  content_hash: str | None = None
  walrus_site_id: str | None = None


EMPTY_RECORD = NameRecord()


@dataclass(frozen=True)
class Found:
  record: NameRecord


@dataclass(frozen=True)
class NotFound:
  name: str


@dataclass(frozen=True)
class ProviderFailure:
  name: str
  detail: str


LookupResult = Found | NotFound | ProviderFailure


class SuinsRpcError(Exception):
  """Raised when the Sui fullnode is unreachable or returns an error."""
  pass


class SuinsClient:
  """
  Minimal SuiNS client over Sui JSON-RPC.

  Holds no mutable state; one instance is shared by all requests.
  """

  def __init__(
    self,
    rpc_url: str = SUI_MAINNET_RPC_URL,
    registry_table_id: str = SUINS_REGISTRY_TABLE_ID,
    domain_type: str = SUINS_DOMAIN_TYPE,
    timeout: float = 10,
  ):
    self.rpc_url = rpc_url
    self.registry_table_id = registry_table_id
    self.domain_type = domain_type
    self.timeout = timeout

  async def lookup(self, name: str) -> LookupResult:
    """
    Look up a SuiNS name such as 'alice.sui'.

    The blocking HTTP call runs in a worker thread so concurrent requests
    are not held up while this one waits on the fullnode.
    """
    return await sync_to_async(self.lookup_sync, thread_sensitive=False)(name)

  def lookup_sync(self, name: str) -> LookupResult:
    try:
      result = self._rpc('suix_getDynamicFieldObject', [
        self.registry_table_id,
        {'type': self.domain_type, 'value': list(reversed(name.split('.')))},
      ])
    except SuinsRpcError as e:
      return ProviderFailure(name, str(e))

    try:
      if result.get('error'):
        # e.g. {'code': 'dynamicFieldNotFound', ...}
        return NotFound(name)
      return Found(parse_name_record(result))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
      logger.warning(f'Unexpected SuiNS record shape for {name}: {e}')
      return ProviderFailure(name, f'Unexpected record shape: {e}')

  def _rpc(self, method: str, params: list) -> dict:
    """
    Make a JSON-RPC call to the Sui fullnode.

    Returns:
      The 'result' portion of the response

    Raises:
      SuinsRpcError: If the request fails or returns a JSON-RPC error
    """
    body = {'jsonrpc': '2.0', 'id': 1, 'method': method, 'params': params}
    data = json.dumps(body).encode('utf-8')
    req = urllib.request.Request(
      self.rpc_url,
      data=data,
      headers={'Content-Type': 'application/json'},
      method='POST',
    )

    try:
      with urllib.request.urlopen(req, timeout=self.timeout) as resp:
        payload = json.loads(resp.read().decode('utf-8'))
    except urllib.error.HTTPError as e:
      error_body = e.read().decode('utf-8', errors='replace')
      logger.warning(f'Sui RPC HTTP error: {e.code} {error_body}')
      raise SuinsRpcError(f'Sui RPC returned {e.code}') from e
    except urllib.error.URLError as e:
      logger.warning(f'Sui RPC not reachable: {e.reason}')
      raise SuinsRpcError(f'Sui RPC connection failed: {e.reason}') from e
    except (TimeoutError, ValueError) as e:
      logger.warning(f'Sui RPC bad response: {e}')
      raise SuinsRpcError(f'Sui RPC bad response: {e}') from e
    except (OSError, http.client.HTTPException) as e:
      # dropped connections and truncated bodies are not wrapped in URLError
      logger.warning(f'Sui RPC connection lost: {e!r}')
      raise SuinsRpcError(f'Sui RPC connection lost: {e!r}') from e

    if not isinstance(payload, dict):
      raise SuinsRpcError('Sui RPC returned a non-object response')

    if 'error' in payload:
      error = payload['error']
      if isinstance(error, dict):
        message = error.get('message', 'Unknown JSON-RPC error')
      else:
        message = str(error)
      logger.warning(f'Sui RPC error: {message}')
      raise SuinsRpcError(message)

    return payload.get('result') or {}


def parse_name_record(result: dict) -> NameRecord:
  """
  Extract a NameRecord from a suix_getDynamicFieldObject result.

  Shape (abridged):
    data.content.fields.value.fields = {
      target_address: '0x…' | None,
      data: {fields: {contents: [{fields: {key, value}}, …]}},
    }
  """
  fields = result['data']['content']['fields']['value']['fields']

  contents = (fields.get('data') or {}).get('fields', {}).get('contents') or []
  entries = {}
  for entry in contents:
    entry_fields = entry.get('fields', entry)
    entries[entry_fields['key']] = entry_fields['value']

  target = fields.get('target_address')
  return NameRecord(
    target_address=_parse_sui_address(target) if target else None,
    avatar=entries.get(AVATAR_KEY) or None,
    content_hash=entries.get(CONTENT_HASH_KEY) or None,
    walrus_site_id=entries.get(WALRUS_SITE_ID_KEY) or None,
  )


def _parse_sui_address(address: str) -> bytes:
  """Parse a 0x-prefixed Sui address into its 32 raw bytes."""
  hex_part = address[2:] if address.startswith('0x') else address
  if len(hex_part) > 64:
    raise ValueError(f'Sui address too long: {address}')
  return bytes.fromhex(hex_part.rjust(64, '0'))
