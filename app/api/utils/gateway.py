"""
CCIP-Read gateway: decode → resolve → sign.

One Gateway is built at startup (see ApiConfig.ready) and shared by every
request; it holds only the provider-backed resolver and the signer.
"""
import logging
import re
from dataclasses import dataclass

from web3 import Web3

from api.utils.ens_codec import DecodedQuery, decode_request
from api.utils.ens_signer import ResponseSigner, SignedResponse
from api.utils.exceptions import InvalidRequestError
from api.utils.resolver import QueryResolver

logger = logging.getLogger('wide_event')

_HEX_RE = re.compile(r'^0x([0-9a-fA-F]{2})*$')


@dataclass(frozen=True)
class OffchainRequest:
  """The (sender, data) pair a client fetched from the OffchainLookup revert."""
  sender: str
  request_data: bytes

  @classmethod
  def from_hex(cls, sender: str, data: str) -> 'OffchainRequest':
    """
    Validate and parse the URL parameters of a lookup.

    Raises:
      InvalidRequestError: If sender is not an address or data is not hex
    """
    if not Web3.is_address(sender):
      raise InvalidRequestError(f'Invalid sender address: {sender}')
    if not _HEX_RE.match(data):
      raise InvalidRequestError('Request data must be 0x-prefixed hex')
    return cls(Web3.to_checksum_address(sender), bytes.fromhex(data[2:]))


@dataclass(frozen=True)
class GatewayResponse:
  """A signed answer plus the query it answers, for logging."""
  query: DecodedQuery
  signed: SignedResponse

  @property
  def data(self) -> str:
    """The 0x-hex payload returned to the client."""
    return '0x' + self.signed.encode().hex()


class Gateway:
  """
  Answers CCIP-Read lookups.

  Args:
    resolver: QueryResolver bound to the name-record provider
    signer: ResponseSigner holding the gateway key
    verifying_contract: Resolver contract bound into signatures; when unset,
      the request's sender is used
  """

  def __init__(
    self,
    resolver: QueryResolver,
    signer: ResponseSigner,
    verifying_contract: str | None = None,
  ):
    self.resolver = resolver
    self.signer = signer
    self.verifying_contract = verifying_contract or None

  async def handle(self, sender: str, data: str) -> GatewayResponse:
    """
    Full lookup from URL parameters to a signed response.

    Raises:
      GatewayError: Any subclass, mapped to an HTTP status by the view
    """
    request = OffchainRequest.from_hex(sender, data)
    query, signed = await self.handle_request(request)
    return GatewayResponse(query, signed)

  async def handle_request(self, request: OffchainRequest) -> tuple[DecodedQuery, SignedResponse]:
    query = decode_request(request.request_data)
    result = await self.resolver.resolve(query)

    contract_address = self.verifying_contract or request.sender
    signed = self.signer.sign(contract_address, request.request_data, result)
    logger.debug(
      f'Signed {query.function_kind.value} for {query.target_name}, expires {signed.expires}'
    )
    return query, signed
