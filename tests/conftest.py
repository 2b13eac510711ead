import base64
import json

import pytest
from PIL import Image

from tailor.api.api import ApiSchema


def encode(document) -> str:
    return base64.b64encode(json.dumps(document).encode()).decode()


def decode(value: str):
    return json.loads(base64.b64decode(value))


SKIN_VALUE = encode({
    'timestamp': 1700000000000,
    'profileName': 'Notch',
    'textures': {'SKIN': {'url': 'http://textures.minecraft.net/texture/abc'}},
})


def session_reply(value=SKIN_VALUE, signature='c2lnbmF0dXJl'):
    return json.dumps({
        'id': '069a79f444e94726a5befca90e38aaf5',
        'name': 'Notch',
        'properties': [{'name': 'textures', 'value': value, 'signature': signature}],
    })


def mineskin_reply(value=SKIN_VALUE, signature='c2lnbmF0dXJl'):
    return json.dumps({
        'success': True,
        'skin': {'uuid': 'd1c1d2a6', 'texture': {'data': {'value': value, 'signature': signature}}},
    }, indent=2)


class FakeUpstream:
    def __init__(self):
        self.replies = {}
        self.calls = []

    def reply(self, prefix, reply):
        self.replies[prefix] = reply

    def urls(self):
        return [url for _, url, _ in self.calls]

    async def api_request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))

        for prefix, reply in self.replies.items():
            if url.startswith(prefix):
                if isinstance(reply, Exception):
                    raise reply
                return reply

        raise AssertionError(f'Unexpected request: {method} {url}')


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()

    async def api_request(self, method, url, **kwargs):
        return await fake.api_request(method, url, **kwargs)

    monkeypatch.setattr(ApiSchema, 'api_request', api_request)
    return fake


@pytest.fixture
def skin_file(tmp_path):
    def make(width=64, height=64, name='skin.png'):
        path = tmp_path / name
        Image.new('RGBA', (width, height), (255, 0, 0, 255)).save(path, 'PNG')
        return path

    return make
