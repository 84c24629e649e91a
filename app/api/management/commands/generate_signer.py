"""
Generate a fresh gateway signer key.

The printed address goes into the resolver contract's signer allow-list;
the private key goes into GATEWAY_SIGNER_KEY.
"""
from django.core.management.base import BaseCommand
from eth_account import Account


class Command(BaseCommand):
  help = 'Generate a new CCIP-Read gateway signer key pair'

  def handle(self, *args, **options):
    account = Account.create()
    self.stdout.write(f'Signer address: {account.address}')
    self.stdout.write(f'GATEWAY_SIGNER_KEY=0x{account.key.hex().removeprefix("0x")}')
    self.stdout.write(self.style.WARNING('Keep the private key secret. Add the address as a signer on the resolver.'))
