from tailor.api.api import ApiSchema
from tailor.utilities import model_variant


class MineSkinApi(ApiSchema):
    __endpoints__ = ['https://api.mineskin.org/generate/']

    def __init__(self, params=None, query=None, *, use_slim=False, **kwargs):
        super().__init__(params, {'v2': 'true', **(query if query else {}), 'model': model_variant(use_slim)}, **kwargs)


class MineSkinUpload(MineSkinApi):
    __endpoints__ = ['upload']


class MineSkinUrl(MineSkinApi):
    __endpoints__ = ['url']

    def __init__(self, url, *, use_slim=False, **kwargs):
        super().__init__(query={'url': url}, use_slim=use_slim, **kwargs)
