import logging
import os
from io import BytesIO
from typing import Optional

import aiohttp
from PIL import Image, UnidentifiedImageError

from tailor.api.ElyApi import ElyTextures
from tailor.api.MineSkinApi import MineSkinUpload, MineSkinUrl
from tailor.api.MojangApi import MojangProfile, SessionProfile
from tailor.exceptions import (DecodeError, InvalidDimensionsError, InvalidFormatError, SkinError, TransportError,
                               UpstreamRejectedError)
from tailor.textures import PROPERTY_TEXTURES, SignedProperty, decode_payload
from tailor.utilities import get_dimensions_representation

log = logging.getLogger(__name__)

PNG_FILE_TYPE = 137
SKIN_WIDTH = 64
SKIN_HEIGHTS = (64, 32)


def skin_from_reply(reply: Optional[str]) -> Optional[SignedProperty]:
    """Extract the signed textures property from an upstream reply.

    Replies are scanned for the first ``"value":"`` and ``"signature":"``
    members rather than parsed against a schema, since Mojang, MineSkin and
    ely.by all wrap the property differently. Empty replies, replies
    mentioning ``error`` and replies missing either member give None.
    """
    log.debug('Parsing skin reply: %s', reply)
    if not reply or 'error' in reply:
        return None

    reply = ''.join(reply.split())

    try:
        value = reply.split('"value":"', 1)[1].split('"', 1)[0]
        signature = reply.split('"signature":"', 1)[1].split('"', 1)[0]
    except IndexError:
        return None

    try:
        decode_payload(value)
    except DecodeError as e:
        log.debug('Reply value is not a texture payload: %s', e)
        return None

    return SignedProperty(PROPERTY_TEXTURES, value, signature)


def read_skin_image(path) -> bytes:
    """Read a skin PNG, checking its file type and dimensions before anything is uploaded."""
    try:
        with open(path, 'rb') as f:
            image = f.read()
    except OSError as e:
        raise TransportError(path, e.strerror or str(e)) from e

    file_type = image[0] if image else None
    log.debug('Checking file type: %s', file_type)
    if file_type != PNG_FILE_TYPE:
        raise InvalidFormatError(path, file_type)

    try:
        with Image.open(BytesIO(image)) as img:
            size = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidFormatError(path, file_type) from e

    width, height = size
    if width != SKIN_WIDTH or height not in SKIN_HEIGHTS:
        raise InvalidDimensionsError(path, width, height)

    log.debug('Skin image %s is %s', path, get_dimensions_representation(size))
    return image


def _signed_skin(endpoint: str, reply: Optional[str]) -> SignedProperty:
    if skin := skin_from_reply(reply):
        return skin

    raise UpstreamRejectedError(endpoint, reply)


async def _upload_skin(path, use_slim: bool) -> SignedProperty:
    image = read_skin_image(path)

    log.debug('Uploading skin to MineSkin.')
    form = aiohttp.FormData()
    form.add_field('file', image, filename=os.path.basename(path), content_type='image/png')

    api = MineSkinUpload(use_slim=use_slim)
    return _signed_skin(api.endpoint_url(), await api.api_post(data=form))


async def _generate_skin(url: str, use_slim: bool) -> SignedProperty:
    api = MineSkinUrl(url, use_slim=use_slim)
    return _signed_skin(api.endpoint_url(), await api.api_get())


async def _player_skin(name: str) -> SignedProperty:
    if uuid := await MojangProfile({'name': name}).uuid():
        log.debug('Mojang skin found. UUID: %s', uuid)
        api = SessionProfile({'uuid': uuid})
    else:
        log.debug('Mojang skin not found, trying via proxy.')
        api = ElyTextures({'name': name})

    return _signed_skin(api.endpoint_url(), await api.api_get())


async def fetch_skin_from_file(path, use_slim: bool = False) -> Optional[SignedProperty]:
    """Upload a local skin file to MineSkin.

    :return: signed textures property, or None if the skin could not be set
    """
    log.debug('Fetching skin from file: %s', path)
    try:
        return await _upload_skin(path, use_slim)
    except SkinError as e:
        log.error('%s: %s', e.__class__.__name__, e)
        return None


async def fetch_skin_by_url(url: str, use_slim: bool = False) -> Optional[SignedProperty]:
    """Let MineSkin generate a signed skin from an image URL.

    :return: signed textures property, or None if the skin could not be set
    """
    log.debug('Fetching skin from URL: %s', url)
    try:
        return await _generate_skin(url, use_slim)
    except SkinError as e:
        log.error('%s: %s', e.__class__.__name__, e)
        return None


async def fetch_skin_by_name(name: str) -> Optional[SignedProperty]:
    """Copy the skin of another player.

    Mojang is asked first; names it does not know are looked up through the
    ely.by skin proxy instead.

    :return: signed textures property, or None if the skin could not be set
    """
    log.debug('Fetching Mojang skin of player: %s', name)
    try:
        return await _player_skin(name)
    except SkinError as e:
        log.error('%s: %s', e.__class__.__name__, e)
        return None
