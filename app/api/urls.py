from django.urls import path, re_path

from api.views import ens_gateway

app_name = 'api'

urlpatterns = [
  # ENS Gateway
  path('lookup/<str:sender>/<str:data>.json', ens_gateway.ccip_read, name='ens-gateway'),
  path('health', ens_gateway.health, name='health'),

  re_path(r'^.*$', ens_gateway.not_found, name='not-found'),
]
