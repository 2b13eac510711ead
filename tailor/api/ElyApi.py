from tailor.api.api import ApiSchema


class ElyApi(ApiSchema):
    __endpoints__ = ['http://skinsystem.ely.by/textures/']


class ElyTextures(ElyApi):
    __endpoints__ = ['signed/{name}.png']

    def __init__(self, params=None, query=None, **kwargs):
        super().__init__(params, {'proxy': 'true', **(query if query else {})}, **kwargs)
