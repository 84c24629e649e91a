"""
Wide-event request logging.

Every request gets a `request._wide_event` dict that views enrich through
its 'extra' mapping. When the response is ready the whole event is written
as a single JSON line on the 'wide_event' logger.
"""
import json
import logging
import time
import uuid

from asgiref.sync import iscoroutinefunction, markcoroutinefunction

logger = logging.getLogger('wide_event')


class WideEventLoggingMiddleware:
  async_capable = True
  sync_capable = True

  def __init__(self, get_response):
    self.get_response = get_response
    if iscoroutinefunction(self.get_response):
      markcoroutinefunction(self)

  def __call__(self, request):
    if iscoroutinefunction(self):
      return self.__acall__(request)
    started = self._start(request)
    response = self.get_response(request)
    self._emit(request, response, started)
    return response

  async def __acall__(self, request):
    started = self._start(request)
    response = await self.get_response(request)
    self._emit(request, response, started)
    return response

  def _start(self, request) -> float:
    request._wide_event = {
      'request_id': uuid.uuid4().hex,
      'method': request.method,
      'path': request.path,
      'extra': {},
    }
    return time.monotonic()

  def _emit(self, request, response, started: float):
    event = request._wide_event
    event['status'] = response.status_code
    event['duration_ms'] = round((time.monotonic() - started) * 1000, 2)
    level = logging.ERROR if response.status_code >= 500 else logging.INFO
    logger.log(level, json.dumps(event, default=str))
