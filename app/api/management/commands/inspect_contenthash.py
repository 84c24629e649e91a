"""
Decode an ENS contenthash value for debugging.

  python manage.py inspect_contenthash 0xe30101701220...
"""
from django.core.management.base import BaseCommand, CommandError

from api.utils.contenthash import IPFS_NAMESPACE, decode_contenthash, encode_contenthash


class Command(BaseCommand):
  help = 'Show the namespace and CID behind a contenthash, or encode a CID string'

  def add_arguments(self, parser):
    parser.add_argument('value', help='0x-hex contenthash, or a CID string with --encode')
    parser.add_argument('--encode', action='store_true', help='Encode a CID string instead')

  def handle(self, *args, **options):
    value = options['value']

    if options['encode']:
      encoded = encode_contenthash(value)
      if not encoded:
        raise CommandError(f'Not a valid CID: {value}')
      self.stdout.write(f'0x{encoded.hex()}')
      return

    try:
      raw = bytes.fromhex(value.removeprefix('0x'))
    except ValueError as e:
      raise CommandError(f'Not hex: {value}') from e
    if not raw:
      self.stdout.write('(empty)')
      return

    try:
      namespace, cid = decode_contenthash(raw)
    except ValueError as e:
      raise CommandError(str(e)) from e

    self.stdout.write(f'Namespace: {namespace} (0x{raw[:2].hex()})')
    self.stdout.write(f'CID: {cid}')
    if raw[:2] == IPFS_NAMESPACE:
      self.stdout.write(f'IPFS URL: https://ipfs.io/ipfs/{cid}')
      self.stdout.write(f'dweb URL: ipfs://{cid}')
