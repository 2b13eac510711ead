import argparse
import asyncio
import logging
import sys

import sentry_sdk
from marshmallow import ValidationError

from tailor.config import sentry_dsn
from tailor.sources.registry import from_known_string, known_sources
from tailor.textures import SignedPropertySchema, TextureType, apply_texture, get_texture

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='skintailor', description='Create signed Minecraft skin properties')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output')
    parser.add_argument('--current', type=str, help='JSON file with the textures property currently in use')
    parser.add_argument('--out', type=str, help='Write the resulting property here instead of stdout')
    parser.add_argument('--merge', action='store_true',
                        help='Fold the new skin into the current textures property (result is unsigned)')

    sub = parser.add_subparsers(dest='source', required=True)
    for source in known_sources.values():
        p = sub.add_parser(source.id, help=f'{source.title}: {source.description}')
        p.add_argument('param', type=str)
        if source.has_skin_models:
            p.add_argument('--slim', action='store_true', help='Use the slim arm model')

    return parser


def load_property(path):
    with open(path, encoding='utf-8') as f:
        return SignedPropertySchema().loads(f.read())


async def run(args, current=None):
    source = from_known_string(args.source)

    prop = await source.fetch(args.param, use_slim=getattr(args, 'slim', False), current=current)

    if prop and args.merge and prop.signed:
        if current is None:
            log.warning('No current property to merge into, keeping the signed skin.')
            return prop

        if skin := get_texture(prop, TextureType.SKIN):
            prop = apply_texture(current, TextureType.SKIN, skin['url'], skin.get('metadata'))

    return prop


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if dsn := sentry_dsn():
        sentry_sdk.init(dsn, traces_sample_rate=1.0)

    try:
        current = load_property(args.current) if args.current else None
    except (OSError, ValueError, ValidationError) as e:
        log.error('Could not read current property from %s: %s', args.current, e)
        return 2

    prop = asyncio.run(run(args, current))
    if prop is None:
        log.error('Skin was not changed.')
        return 1

    output = SignedPropertySchema().dumps(prop)
    if args.out:
        with open(args.out, 'w', encoding='utf-8') as f:
            f.write(output)
    else:
        print(output)

    return 0


if __name__ == '__main__':
    sys.exit(main())
