from tailor.sources.sources import SkinSource
from tailor.textures import TextureType, apply_texture


class Cape(SkinSource):
    id = 'cape'
    title = 'Cape'
    description = 'Wear a cape from an image URL. Capes are not signed.'
    has_skin_models = False

    async def fetch(self, param, *, use_slim=False, current=None):
        return apply_texture(current, TextureType.CAPE, param)
