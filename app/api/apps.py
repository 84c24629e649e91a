from django.apps import AppConfig
from django.conf import settings


class ApiConfig(AppConfig):
  name = 'api'

  gateway = None

  def ready(self):
    """Build the shared gateway once, from settings."""
    from api.utils.ens_signer import ResponseSigner
    from api.utils.gateway import Gateway
    from api.utils.resolver import QueryResolver
    from api.utils.suins_client import SuinsClient

    provider = SuinsClient(
      rpc_url=settings.SUI_RPC_URL,
      registry_table_id=settings.SUINS_REGISTRY_TABLE_ID,
      domain_type=settings.SUINS_DOMAIN_TYPE,
      timeout=settings.SUI_RPC_TIMEOUT,
    )
    resolver = QueryResolver(
      provider,
      parent_domain=settings.GATEWAY_PARENT_DOMAIN,
      native_suffix=settings.GATEWAY_NATIVE_SUFFIX,
    )
    signer = ResponseSigner(settings.GATEWAY_SIGNER_KEY, ttl=settings.GATEWAY_RESPONSE_TTL)
    self.gateway = Gateway(
      resolver,
      signer,
      verifying_contract=settings.GATEWAY_VERIFYING_CONTRACT,
    )
