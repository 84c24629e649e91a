"""
Query resolver: answers decoded ENS resolver calls from SuiNS records.

  addr(784)        → SuiNS target address (32 bytes)
  addr(other)      → zero value, no cross-chain mapping is kept
  text(key)        → avatar / contentHash / walrusSiteId / org.suins.name
  contenthash      → ENSIP-7 encoding of the SuiNS content hash

A missing name and an unreachable fullnode both resolve to the empty
record; they are only told apart in the logs.
"""
import logging

from api.utils.contenthash import encode_contenthash
from api.utils.ens_codec import (
  DecodedQuery,
  FunctionKind,
  encode_addr_response,
  encode_contenthash_response,
  encode_text_response,
)
from api.utils.exceptions import DomainMismatchError, UnsupportedQueryError
from api.utils.suins_client import EMPTY_RECORD, Found, NameRecord, NotFound

logger = logging.getLogger('wide_event')

# SUI coin type per SLIP-44 / ENSIP-9
SUI_COIN_TYPE = 784

ZERO_ADDRESS = b'\x00' * 32

# text key → NameRecord attribute
_RECORD_TEXT_KEYS = {
  'avatar': 'avatar',
  'contentHash': 'content_hash',
  'walrusSiteId': 'walrus_site_id',
}

ORIGINAL_NAME_KEY = 'org.suins.name'


def to_native_name(name: str, parent_domain: str, native_suffix: str) -> str:
  """
  Map an ENS subname onto the SuiNS name it mirrors.

  Example: 'alice.onsui.eth' → 'alice.sui'

  Raises:
    DomainMismatchError: If the name is not a subname of parent_domain
  """
  suffix = f'.{parent_domain.lower()}'
  lowered = name.lower()
  if not lowered.endswith(suffix) or len(lowered) == len(suffix):
    raise DomainMismatchError(f'Name "{name}" is not a subname of {parent_domain}')
  return f'{lowered[:-len(suffix)]}.{native_suffix}'


class QueryResolver:
  """Resolves DecodedQuery values against a name-record provider."""

  def __init__(
    self,
    provider,
    parent_domain: str,
    native_suffix: str = 'sui',
    coin_type: int = SUI_COIN_TYPE,
  ):
    self.provider = provider
    self.parent_domain = parent_domain
    self.native_suffix = native_suffix
    self.coin_type = coin_type

  async def resolve(self, query: DecodedQuery) -> bytes:
    """
    Resolve a query to the ABI-encoded bytes its resolver function returns.

    Raises:
      UnsupportedQueryError: For any function other than addr/text/contenthash
      DomainMismatchError: If the name is outside the served parent domain
    """
    if query.function_kind is FunctionKind.UNSUPPORTED:
      raise UnsupportedQueryError(
        f'Unsupported query function selector: 0x{query.selector.hex()}'
      )

    native_name = to_native_name(query.target_name, self.parent_domain, self.native_suffix)
    record = await self._fetch(native_name)

    if query.function_kind is FunctionKind.ADDRESS:
      return encode_addr_response(self.resolve_addr(record, query.coin_type))
    if query.function_kind is FunctionKind.TEXT:
      return encode_text_response(self.resolve_text(record, query.text_key, query.target_name))
    if query.function_kind is FunctionKind.CONTENT_HASH:
      return encode_contenthash_response(encode_contenthash(record.content_hash))
    raise UnsupportedQueryError(f'Unhandled function kind: {query.function_kind}')

  async def _fetch(self, native_name: str) -> NameRecord:
    """Single provider call; NotFound and failures degrade to the empty record."""
    outcome = await self.provider.lookup(native_name)
    if isinstance(outcome, Found):
      return outcome.record
    if isinstance(outcome, NotFound):
      logger.info(f'SuiNS name {native_name} not found')
    else:
      logger.warning(f'SuiNS lookup for {native_name} failed: {outcome.detail}')
    return EMPTY_RECORD

  def resolve_addr(self, record: NameRecord, coin_type: int | None) -> bytes:
    if coin_type == self.coin_type:
      return record.target_address or ZERO_ADDRESS
    return ZERO_ADDRESS

  def resolve_text(self, record: NameRecord, key: str | None, target_name: str) -> str:
    if key in _RECORD_TEXT_KEYS:
      return getattr(record, _RECORD_TEXT_KEYS[key]) or ''
    if key == ORIGINAL_NAME_KEY:
      # Convenience: return the original SuiNS name
      return f'{target_name.split(".")[0].lower()}.{self.native_suffix}'
    return ''
