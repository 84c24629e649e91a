"""
ENS gateway response signer.

Signs CCIP-Read responses using the scheme expected by the offchain resolver
(SignatureVerifier.makeSignatureHash):
  keccak256(abi.encodePacked(
    0x1900,
    contractAddress,
    expires,
    keccak256(request),
    keccak256(result)
  ))
"""
import time
from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured
from eth_account import Account
from eth_keys import keys
from web3 import Web3

from api.utils.ens_codec import encode_gateway_response
from api.utils.exceptions import SigningError


# Default response validity: 5 minutes
DEFAULT_TTL = 300


@dataclass(frozen=True)
class SignedResponse:
  result: bytes
  expires: int
  signature: bytes

  def encode(self) -> bytes:
    """ABI-encode as (bytes result, uint64 expires, bytes sig)."""
    return encode_gateway_response(self.result, self.expires, self.signature)


def make_message_hash(
  contract_address: str,
  expires: int,
  request_data: bytes,
  result: bytes,
) -> bytes:
  """
  Build the hash the resolver contract recomputes before ecrecover.

  Args:
    contract_address: The resolver contract that verifies the signature
    expires: Unix timestamp after which the response is rejected
    request_data: The original resolve() call data
    result: The ABI-encoded resolution result

  Returns:
    32-byte message hash
  """
  request_hash = Web3.solidity_keccak(['bytes'], [request_data])
  result_hash = Web3.solidity_keccak(['bytes'], [result])

  # Pack exactly as the contract does
  return bytes(Web3.solidity_keccak(
    ['bytes2', 'address', 'uint64', 'bytes32', 'bytes32'],
    [
      b'\x19\x00',
      Web3.to_checksum_address(contract_address),
      expires,
      request_hash,
      result_hash,
    ],
  ))


def recover_signer(message_hash: bytes, signature: bytes) -> str:
  """
  Recover the checksummed signer address from an r ‖ s ‖ v signature,
  the same way the contract's ecrecover does.
  """
  if len(signature) != 65:
    raise ValueError(f'Expected a 65-byte signature, got {len(signature)}')
  # Adjust v value if needed (27/28 → 0/1)
  v = signature[64]
  if v >= 27:
    v -= 27
  signature_obj = keys.Signature(signature_bytes=bytes(signature[:64]) + bytes([v]))
  pubkey = signature_obj.recover_public_key_from_msg_hash(message_hash)
  return pubkey.to_checksum_address()


class ResponseSigner:
  """
  Holds the gateway signer key; shared read-only by all requests.

  An empty key is tolerated at startup so management commands still run,
  but every sign() then fails with SigningError.
  """

  def __init__(self, private_key: str, ttl: int = DEFAULT_TTL):
    if ttl <= 0:
      raise ImproperlyConfigured('GATEWAY_RESPONSE_TTL must be positive')
    self.ttl = ttl
    self._account = None
    if private_key:
      try:
        self._account = Account.from_key(private_key)
      except (ValueError, TypeError) as e:
        raise ImproperlyConfigured(f'GATEWAY_SIGNER_KEY is not a valid private key: {e}') from e

  @property
  def address(self) -> str | None:
    return self._account.address if self._account else None

  def sign(
    self,
    contract_address: str,
    request_data: bytes,
    result: bytes,
    now: int | None = None,
  ) -> SignedResponse:
    """
    Sign a CCIP-Read response.

    Args:
      contract_address: The resolver contract address bound into the signature
      request_data: The original resolve() call data
      result: The ABI-encoded resolution result
      now: Current unix time (defaults to the wall clock)

    Returns:
      SignedResponse with expires = now + ttl

    Raises:
      SigningError: If no key is configured or signing fails
    """
    if self._account is None:
      raise SigningError('GATEWAY_SIGNER_KEY not configured')

    expires = (int(time.time()) if now is None else now) + self.ttl

    try:
      message_hash = make_message_hash(contract_address, expires, request_data, result)
      # Sign the hash directly (raw hash sign, not an EIP-191 message)
      signed = self._account.unsafe_sign_hash(message_hash)
    except (ValueError, TypeError) as e:
      raise SigningError(f'Could not sign response: {e}') from e

    return SignedResponse(result=result, expires=expires, signature=bytes(signed.signature))
