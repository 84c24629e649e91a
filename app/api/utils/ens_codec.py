"""
ENS codec utilities for the CCIP-Read gateway.

Handles DNS name parsing, ENS namehash computation, decoding of the
resolve(bytes name, bytes data) request and ABI encoding of resolver
results and EIP-3668 responses.
"""
import enum
from dataclasses import dataclass

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from api.utils.exceptions import DecodeError


# IExtendedResolver.resolve(bytes,bytes), prefixed on calldata sent by clients
RESOLVE_SELECTOR = bytes.fromhex('9061b923')

# Standard resolver function selectors
ADDR_SELECTOR = bytes.fromhex('f1cb7e06')         # addr(bytes32,uint256)
TEXT_SELECTOR = bytes.fromhex('59d1d43c')         # text(bytes32,string)
CONTENTHASH_SELECTOR = bytes.fromhex('bc1c58d1')  # contenthash(bytes32)

MAX_LABEL_LENGTH = 255

ZERO_NODE = b'\x00' * 32


class FunctionKind(enum.Enum):
  ADDRESS = 'addr'
  TEXT = 'text'
  CONTENT_HASH = 'contenthash'
  UNSUPPORTED = 'unsupported'


# selector → (kind, argument types after the node)
_KNOWN_FUNCTIONS = {
  ADDR_SELECTOR: (FunctionKind.ADDRESS, ['uint256']),
  TEXT_SELECTOR: (FunctionKind.TEXT, ['string']),
  CONTENTHASH_SELECTOR: (FunctionKind.CONTENT_HASH, []),
}


@dataclass(frozen=True)
class DecodedQuery:
  """A resolver call decoded out of a CCIP-Read request."""
  target_name: str
  function_kind: FunctionKind
  node_hash: bytes
  selector: bytes = b''
  coin_type: int | None = None
  text_key: str | None = None


# ─────────────────────────────────────────────────────────────────────────────
# DNS wire format
# ─────────────────────────────────────────────────────────────────────────────

def dns_encode(name: str) -> bytes:
  """
  Encode a dotted name into DNS wire format.

  Example: 'alice.onsui.eth' → b'\\x05alice\\x05onsui\\x03eth\\x00'

  Raises:
    ValueError: If a label is empty or longer than 255 bytes
  """
  encoded = bytearray()
  if name:
    for label in name.split('.'):
      label_bytes = label.encode('utf-8')
      if not label_bytes:
        raise ValueError(f'Empty label in name {name!r}')
      if len(label_bytes) > MAX_LABEL_LENGTH:
        raise ValueError(f'Label {label[:16]!r}... exceeds {MAX_LABEL_LENGTH} bytes')
      encoded.append(len(label_bytes))
      encoded += label_bytes
  encoded.append(0)
  return bytes(encoded)


def dns_decode(dns_name: bytes) -> str:
  """
  Decode a DNS-encoded name into a human-readable dotted string.
  DNS encoding: each label is prefixed with its length byte, terminated by 0x00.

  Example: b'\\x05alice\\x05onsui\\x03eth\\x00' → 'alice.onsui.eth'

  Raises:
    DecodeError: If a length byte overruns the buffer, a label is not
      UTF-8, or the terminating zero byte is missing
  """
  labels = []
  i = 0
  while i < len(dns_name):
    length = dns_name[i]
    i += 1
    if length == 0:
      return '.'.join(labels)
    if i + length > len(dns_name):
      raise DecodeError(f'DNS label length {length} at offset {i - 1} overruns name')
    try:
      labels.append(dns_name[i:i + length].decode('utf-8'))
    except UnicodeDecodeError as e:
      raise DecodeError(f'DNS label at offset {i - 1} is not valid UTF-8') from e
    i += length
  raise DecodeError('DNS name is missing its terminating zero byte')


# ─────────────────────────────────────────────────────────────────────────────
# ENS Namehash
# ─────────────────────────────────────────────────────────────────────────────

def namehash(name: str) -> bytes:
  """
  Compute the ENS namehash for a dotted name.

  namehash("") = 0x0000...0000
  namehash("eth") = keccak256(namehash("") + keccak256("eth"))
  namehash("alice.onsui.eth") = keccak256(namehash("onsui.eth") + keccak256("alice"))

  Names are lower-cased first, so "Alice.eth" and "alice.eth" share a node.

  Returns:
    32-byte namehash
  """
  node = ZERO_NODE
  if not name:
    return node
  for label in reversed(name.lower().split('.')):
    node = Web3.keccak(node + Web3.keccak(text=label))
  return bytes(node)


# ─────────────────────────────────────────────────────────────────────────────
# Request decoding
# ─────────────────────────────────────────────────────────────────────────────

def decode_request(request_data: bytes) -> DecodedQuery:
  """
  Decode the data of a resolve(bytes name, bytes data) call.

  The 4-byte resolve selector is optional: clients send the full calldata,
  but the bare ABI tuple is accepted too.

  Raises:
    DecodeError: If the outer tuple or the DNS name is malformed, or the
      call's node does not match the name
  """
  payload = request_data
  if payload[:4] == RESOLVE_SELECTOR:
    payload = payload[4:]

  try:
    name_bytes, call_data = decode(['bytes', 'bytes'], payload)
  except (DecodingError, ValueError, OverflowError) as e:
    raise DecodeError(f'Malformed resolve() payload: {e}') from e

  name = dns_decode(name_bytes)
  node = namehash(name)
  selector = bytes(call_data[:4])

  kind, arg_types = _KNOWN_FUNCTIONS.get(selector, (FunctionKind.UNSUPPORTED, None))
  if kind is FunctionKind.UNSUPPORTED:
    return DecodedQuery(name, kind, node, selector=selector)

  try:
    call_node, *args = decode(['bytes32', *arg_types], call_data[4:])
  except (DecodingError, ValueError, OverflowError):
    # Structurally sound request, but not a call we can answer
    return DecodedQuery(name, FunctionKind.UNSUPPORTED, node, selector=selector)

  if call_node != node:
    raise DecodeError(
      f'Node 0x{call_node.hex()} does not match namehash of {name!r}'
    )

  if kind is FunctionKind.ADDRESS:
    return DecodedQuery(name, kind, node, selector=selector, coin_type=args[0])
  if kind is FunctionKind.TEXT:
    return DecodedQuery(name, kind, node, selector=selector, text_key=args[0])
  return DecodedQuery(name, kind, node, selector=selector)


def encode_resolve_request(name: str, call_data: bytes) -> bytes:
  """Build resolve(bytes,bytes) calldata, as a CCIP-Read client would send it."""
  return RESOLVE_SELECTOR + encode(['bytes', 'bytes'], [dns_encode(name), call_data])


def encode_addr_call(name: str, coin_type: int) -> bytes:
  """ABI-encode addr(bytes32 node, uint256 coinType) for a name."""
  return ADDR_SELECTOR + encode(['bytes32', 'uint256'], [namehash(name), coin_type])


def encode_text_call(name: str, key: str) -> bytes:
  """ABI-encode text(bytes32 node, string key) for a name."""
  return TEXT_SELECTOR + encode(['bytes32', 'string'], [namehash(name), key])


def encode_contenthash_call(name: str) -> bytes:
  """ABI-encode contenthash(bytes32 node) for a name."""
  return CONTENTHASH_SELECTOR + encode(['bytes32'], [namehash(name)])


# ─────────────────────────────────────────────────────────────────────────────
# Result / response encoding
# ─────────────────────────────────────────────────────────────────────────────

def encode_addr_response(address: bytes) -> bytes:
  """ABI-encode the bytes returned by addr(bytes32,uint256)."""
  return encode(['bytes'], [address])


def encode_text_response(value: str) -> bytes:
  """ABI-encode a string for text(bytes32,string) response."""
  return encode(['string'], [value])


def encode_contenthash_response(value: bytes) -> bytes:
  """ABI-encode the bytes returned by contenthash(bytes32)."""
  return encode(['bytes'], [value])


def encode_gateway_response(result: bytes, expires: int, signature: bytes) -> bytes:
  """
  ABI-encode the full gateway response for resolveWithProof callback.
  Format: (bytes result, uint64 expires, bytes signature)
  """
  return encode(['bytes', 'uint64', 'bytes'], [result, expires, signature])


def decode_gateway_response(data: bytes) -> tuple[bytes, int, bytes]:
  """Inverse of encode_gateway_response: (result, expires, signature)."""
  result, expires, signature = decode(['bytes', 'uint64', 'bytes'], data)
  return result, expires, signature
