import base64
import binascii
import json
import logging
from enum import Enum
from typing import NamedTuple, Optional, Union

from marshmallow import EXCLUDE, INCLUDE, Schema, ValidationError, fields, post_load

from tailor.exceptions import DecodeError

log = logging.getLogger(__name__)

PROPERTY_TEXTURES = 'textures'


class TextureType(Enum):
    SKIN = 'SKIN'
    CAPE = 'CAPE'
    ELYTRA = 'ELYTRA'


class SignedProperty(NamedTuple):
    name: str
    value: str
    signature: Optional[str] = None

    @property
    def signed(self) -> bool:
        return self.signature is not None


class SignedPropertySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=PROPERTY_TEXTURES)
    value = fields.String(required=True)
    signature = fields.String(allow_none=True, load_default=None)

    @post_load
    def make_property(self, data, **kwargs):
        return SignedProperty(**data)


class TextureEntrySchema(Schema):
    class Meta:
        unknown = INCLUDE

    url = fields.String(required=True)
    metadata = fields.Dict(keys=fields.String())


class TexturePayloadSchema(Schema):
    class Meta:
        unknown = INCLUDE

    textures = fields.Dict(keys=fields.String(), values=fields.Nested(TextureEntrySchema), required=True)


def decode_payload(value: str) -> dict:
    """Decode the base64 JSON document carried by a textures property.

    Raises DecodeError when the value is not base64, not JSON, or does not
    have the payload shape.
    """
    try:
        document = json.loads(base64.b64decode(value, validate=True).decode('utf-8'))
        return TexturePayloadSchema().load(document)
    except (binascii.Error, ValueError, TypeError, ValidationError) as e:
        raise DecodeError(f'Invalid texture payload: {e}') from e


def encode_payload(payload: dict) -> str:
    document = json.dumps(payload, separators=(',', ':'), ensure_ascii=False)
    return base64.b64encode(document.encode('utf-8')).decode('ascii')


def get_texture(prop: Optional[SignedProperty], texture_type: Union[TextureType, str]) -> Optional[dict]:
    if prop is None:
        return None

    try:
        return decode_payload(prop.value)['textures'].get(TextureType(texture_type).value)
    except DecodeError:
        log.warning('Could not read %s texture from property %r', TextureType(texture_type).value, prop.name)
        return None


def apply_texture(current: Optional[SignedProperty], texture_type: Union[TextureType, str], url: str,
                  metadata: Optional[dict] = None) -> SignedProperty:
    """Return an unsigned textures property with ``texture_type`` pointing at ``url``.

    Every other texture entry of ``current`` is carried over as-is. The entry
    being updated loses any previous metadata; ``metadata`` replaces it only
    when given. ``current`` itself is never modified.
    """
    key = TextureType(texture_type).value
    payload = {'textures': {}}

    if current is not None:
        try:
            payload = decode_payload(current.value)
        except DecodeError as e:
            log.warning('Ignoring existing textures property: %s', e)

    entry = {k: v for k, v in payload['textures'].get(key, {}).items() if k not in ('url', 'metadata')}
    entry['url'] = url
    if metadata is not None:
        entry['metadata'] = dict(metadata)

    textures = {**payload['textures'], key: entry}

    return SignedProperty(PROPERTY_TEXTURES, encode_payload({**payload, 'textures': textures}))
