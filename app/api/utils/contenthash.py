"""
ENSIP-7 contenthash codec for SuiNS content identifiers.

SuiNS stores a record's content hash as a plain CID string. ENS expects
the binary form: a namespace multicodec followed by the CIDv1 bytes.

  Qm...   (CIDv0, base58btc)  → upgraded to v1, digest untouched
  bafy... (CIDv1, base32)     → used as-is
  other                        → generic multibase parse, upgraded if v0

Only the ipfs-ns namespace (0xe301) is produced. The ipns-ns namespace
(0xe501) is recognized by decode_contenthash for diagnostics.
"""
import enum
import logging

from multiformats import CID

logger = logging.getLogger('wide_event')

IPFS_NAMESPACE = bytes.fromhex('e301')
IPNS_NAMESPACE = bytes.fromhex('e501')

NAMESPACES = {
  IPFS_NAMESPACE: 'ipfs-ns',
  IPNS_NAMESPACE: 'ipns-ns',
}


class CidFormat(enum.Enum):
  LEGACY_BASE58 = 'cidv0-base58btc'
  BASE32_V1 = 'cidv1-base32'
  GENERIC = 'generic'


def classify(cid_str: str) -> CidFormat:
  """Classify a CID string by its leading characters."""
  if cid_str.startswith('Qm'):
    return CidFormat.LEGACY_BASE58
  if cid_str.startswith('baf'):
    # covers bafy (dag-pb) and bafk (raw) as well
    return CidFormat.BASE32_V1
  return CidFormat.GENERIC


def parse_cid(cid_str: str) -> CID | None:
  """
  Parse a CID string into a version-1 CID.

  Returns:
    The CIDv1, or None if the string is not a valid CID
  """
  fmt = classify(cid_str)
  try:
    cid = CID.decode(cid_str)
  except (ValueError, KeyError, TypeError) as e:
    # bases errors subclass binascii.Error, a ValueError
    logger.debug(f'Unparsable CID {cid_str!r} ({fmt.value}): {e}')
    return None

  if fmt is CidFormat.BASE32_V1 and cid.version != 1:
    logger.debug(f'CID {cid_str!r} looks like v1 but decoded as v{cid.version}')
    return None

  if cid.version == 0:
    cid = cid.set(version=1)
  return cid


def encode_contenthash(cid_str: str | None) -> bytes:
  """
  Translate a SuiNS content hash string into ENS contenthash bytes.

  Returns:
    0xe301 ‖ CIDv1 bytes, or b'' if the value is missing or unparsable
  """
  if not cid_str:
    return b''
  cid = parse_cid(cid_str.strip())
  if cid is None:
    return b''
  return IPFS_NAMESPACE + bytes(cid)


def decode_contenthash(value: bytes) -> tuple[str, str]:
  """
  Inverse of encode_contenthash, for diagnostics.

  Returns:
    (namespace name, base32 CIDv1 string)

  Raises:
    ValueError: On an unknown namespace or undecodable CID bytes
  """
  namespace = NAMESPACES.get(bytes(value[:2]))
  if namespace is None:
    raise ValueError(f'Unknown contenthash namespace 0x{bytes(value[:2]).hex()}')
  try:
    cid = CID.decode(bytes(value[2:]))
  except (ValueError, KeyError, TypeError) as e:
    raise ValueError(f'Invalid CID bytes: {e}') from e
  return namespace, cid.set(version=1).encode('base32')
