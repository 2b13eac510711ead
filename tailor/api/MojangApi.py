from typing import Optional

from marshmallow import ValidationError, fields

from tailor.api.api import ApiSchema


class MojangApi(ApiSchema):
    __endpoints__ = ['https://api.mojang.com/']


class MojangProfile(MojangApi):
    __endpoints__ = ['users/profiles/minecraft/{name}']

    id = fields.String()
    name = fields.String()

    def api_get_404(self):
        return ''

    async def uuid(self) -> Optional[str]:
        """Player UUID, or None if Mojang has no account with this name."""
        reply = await self.api_get()

        try:
            return self.loads(reply).get('id') or None
        except (ValueError, ValidationError):
            return None


class SessionServerApi(ApiSchema):
    __endpoints__ = ['https://sessionserver.mojang.com/session/minecraft/']


class SessionProfile(SessionServerApi):
    __endpoints__ = ['profile/{uuid}']

    def __init__(self, params=None, query=None, **kwargs):
        super().__init__(params, {'unsigned': 'false', **(query if query else {})}, **kwargs)
