from tailor import SkinFetcher
from tailor.sources.sources import SkinSource


class LocalSkin(SkinSource):
    id = 'local'
    title = 'Local skin'
    description = 'Upload a skin image from your computer.'

    async def fetch(self, param, *, use_slim=False, current=None):
        return await SkinFetcher.fetch_skin_from_file(param, use_slim)


class UrlSkin(SkinSource):
    id = 'url'
    title = 'Skin from URL'
    description = 'Use a skin image hosted on the web.'

    async def fetch(self, param, *, use_slim=False, current=None):
        return await SkinFetcher.fetch_skin_by_url(param, use_slim)


class PlayerSkin(SkinSource):
    id = 'player'
    title = 'Player skin'
    description = 'Copy the skin of another player.'
    has_skin_models = False

    async def fetch(self, param, *, use_slim=False, current=None):
        return await SkinFetcher.fetch_skin_by_name(param)
