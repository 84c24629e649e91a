"""
Gateway error taxonomy.

Every error that reaches the HTTP boundary carries a stable code and the
status it maps to. "No data" conditions (lookup misses, provider outages,
unparsable content hashes) never raise; they resolve to default values
inside the resolver.
"""


class GatewayError(Exception):
  """Base class for errors surfaced to CCIP-Read clients."""
  code = 'GATEWAY_ERROR'
  status = 500


class DecodeError(GatewayError):
  """Raised when the request payload is structurally malformed."""
  code = 'DECODE_ERROR'
  status = 400


class UnsupportedQueryError(GatewayError):
  """Raised for resolver functions the gateway does not answer."""
  code = 'UNSUPPORTED_QUERY'
  status = 400


class DomainMismatchError(GatewayError):
  """Raised when a name is not a subname of the served parent domain."""
  code = 'DOMAIN_MISMATCH'
  status = 400


class SigningError(GatewayError):
  """Raised when a response cannot be signed (e.g. missing signer key)."""
  code = 'SIGNING_ERROR'
  status = 500


class InvalidRequestError(GatewayError):
  """Raised when the sender or data URL parameters are not well formed."""
  code = 'INVALID_REQUEST'
  status = 400
