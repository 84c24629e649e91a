"""
Permissive CORS for the gateway.

CCIP-Read lookups are made straight from browser wallets and dapps on any
origin, so every response carries allow-all headers and OPTIONS preflights
are answered here without reaching a view.
"""
from asgiref.sync import iscoroutinefunction, markcoroutinefunction
from django.http import HttpResponse

CORS_HEADERS = {
  'Access-Control-Allow-Origin': '*',
  'Access-Control-Allow-Methods': 'GET, OPTIONS',
  'Access-Control-Allow-Headers': 'Content-Type',
  'Access-Control-Max-Age': '86400',
}


def _corsify(response):
  for header, value in CORS_HEADERS.items():
    response[header] = value
  return response


class CorsMiddleware:
  async_capable = True
  sync_capable = True

  def __init__(self, get_response):
    self.get_response = get_response
    if iscoroutinefunction(self.get_response):
      markcoroutinefunction(self)

  def __call__(self, request):
    if iscoroutinefunction(self):
      return self.__acall__(request)
    if request.method == 'OPTIONS':
      return _corsify(HttpResponse(status=204))
    return _corsify(self.get_response(request))

  async def __acall__(self, request):
    if request.method == 'OPTIONS':
      return _corsify(HttpResponse(status=204))
    return _corsify(await self.get_response(request))
