"""
ENS CCIP-Read gateway views.

Implements EIP-3668 offchain data lookup for the onsui.eth resolver.
Resolves subnames like alice.onsui.eth from the SuiNS record of alice.sui.

Endpoint: /lookup/{sender}/{data}.json
"""
import logging

from django.apps import apps
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from api.utils.exceptions import GatewayError

logger = logging.getLogger('wide_event')

SERVICE_NAME = 'suins-ens-gateway'


def _error(exc: GatewayError) -> JsonResponse:
  return JsonResponse({'error': exc.code, 'message': str(exc)}, status=exc.status)


@require_GET
async def ccip_read(request, sender, data):
  """
  Handle CCIP-Read requests from the resolver contract.

  The URL format is: /lookup/{sender}/{data}.json
  - sender: the resolver contract address
  - data: hex-encoded resolve(bytes name, bytes data) call

  Returns JSON: { data: "0x..." } with the ABI-encoded signed response.
  """
  gateway = apps.get_app_config('api').gateway
  wide_event = getattr(request, '_wide_event', {'extra': {}})

  try:
    response = await gateway.handle(sender, data)
  except GatewayError as e:
    wide_event['extra']['ens_error'] = e.code
    if e.status >= 500:
      logger.error(f'CCIP-Read gateway error: {e.code} {e}')
    return _error(e)
  except Exception:
    logger.exception('CCIP-Read gateway error')
    wide_event['extra']['ens_error'] = 'INTERNAL_ERROR'
    return JsonResponse({'error': 'INTERNAL_ERROR', 'message': 'Unable to resolve'}, status=500)

  # Enrich wide event
  wide_event['extra']['ens_name'] = response.query.target_name
  wide_event['extra']['ens_function'] = response.query.function_kind.value
  wide_event['extra']['ens_expires'] = response.signed.expires

  return JsonResponse({'data': response.data})


@require_GET
def health(request):
  """Liveness check."""
  return JsonResponse({'status': 'ok', 'service': SERVICE_NAME})


def not_found(request, exception=None):
  """JSON 404 for every unknown route."""
  return JsonResponse({'error': 'NOT_FOUND', 'message': 'Not found'}, status=404)
