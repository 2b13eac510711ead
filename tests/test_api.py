import asyncio

import aiohttp
import pytest
from aiohttp import test_utils, web

from tailor import SkinFetcher
from tailor.api.ElyApi import ElyTextures
from tailor.api.MineSkinApi import MineSkinUpload, MineSkinUrl
from tailor.api.MojangApi import MojangProfile, SessionProfile
from tailor.exceptions import TransportError, UpstreamRejectedError


def serve(handler, request):
    async def run():
        app = web.Application()
        app.router.add_route('*', '/{tail:.*}', handler)
        async with test_utils.TestServer(app) as server:
            return await request(str(server.make_url('/skin')))

    return asyncio.run(run())


def test_endpoint_urls():
    assert MojangProfile({'name': 'Notch'}).endpoint_url() == 'https://api.mojang.com/users/profiles/minecraft/Notch'
    assert SessionProfile({'uuid': 'abc'}).endpoint_url() == \
        'https://sessionserver.mojang.com/session/minecraft/profile/abc?unsigned=false'
    assert MineSkinUpload().endpoint_url() == 'https://api.mineskin.org/generate/upload?v2=true&model=steve'
    assert MineSkinUpload(use_slim=True).endpoint_url() == 'https://api.mineskin.org/generate/upload?v2=true&model=slim'
    assert MineSkinUrl('http://x/s.png', use_slim=True).endpoint_url() == \
        'https://api.mineskin.org/generate/url?v2=true&url=http%3A%2F%2Fx%2Fs.png&model=slim'
    assert ElyTextures({'name': 'Steve'}).endpoint_url() == \
        'http://skinsystem.ely.by/textures/signed/Steve.png?proxy=true'


def test_endpoint_url_quotes_params():
    assert MojangProfile({'name': 'a/b c'}).endpoint_url() == \
        'https://api.mojang.com/users/profiles/minecraft/a%2Fb%20c'


def test_endpoint_url_missing_params():
    with pytest.raises(ValueError):
        MojangProfile().endpoint_url()


def test_api_request_headers(monkeypatch):
    monkeypatch.setenv('USER_AGENT', 'TailorTest/1.0')
    seen = {}

    async def handler(request):
        seen.update(request.headers)
        return web.Response(text='{"id":"abc"}')

    reply = serve(handler, lambda url: MojangProfile().api_request('GET', url))

    assert reply == '{"id":"abc"}'
    assert seen['User-Agent'] == 'TailorTest/1.0'
    assert seen['Cache-Control'] == 'no-cache'
    assert seen['Pragma'] == 'no-cache'


def test_api_request_status_hook():
    async def handler(request):
        return web.json_response({'errorMessage': "Couldn't find any profile with name Steve"}, status=404)

    assert serve(handler, lambda url: MojangProfile().api_request('GET', url)) == ''


def test_api_request_error_status():
    async def handler(request):
        return web.Response(status=500)

    with pytest.raises(UpstreamRejectedError):
        serve(handler, lambda url: SessionProfile().api_request('GET', url))


def test_api_request_connection_refused():
    with pytest.raises(TransportError):
        asyncio.run(ElyTextures().api_request('GET', 'http://127.0.0.1:1/'))


def test_api_request_timeout(monkeypatch):
    monkeypatch.setenv('REQUEST_TIMEOUT', '0.1')

    async def handler(request):
        await asyncio.sleep(0.5)
        return web.Response()

    with pytest.raises(TransportError):
        serve(handler, lambda url: SessionProfile().api_request('GET', url))


def test_api_request_multipart_upload():
    seen = {}

    async def handler(request):
        seen['content_type'] = request.headers['Content-Type']
        form = await request.post()
        seen['filename'] = form['file'].filename
        seen['body'] = form['file'].file.read()
        return web.Response(text='ok')

    def upload(url):
        form = aiohttp.FormData()
        form.add_field('file', b'\x89PNG data', filename='skin.png', content_type='image/png')
        return MineSkinUpload().api_request('POST', url, data=form)

    assert serve(handler, upload) == 'ok'
    assert seen['content_type'].startswith('multipart/form-data; boundary=')
    assert seen['filename'] == 'skin.png'
    assert seen['body'] == b'\x89PNG data'


def test_fetch_skin_by_url_undecodable_reply(monkeypatch, caplog):
    async def handler(request):
        return web.Response(body=b'{"value":"\xff\xfe"}', content_type='application/json')

    async def fetch(url):
        monkeypatch.setattr(MineSkinUrl, 'endpoint_url', lambda self: url)
        return await SkinFetcher.fetch_skin_by_url('http://x/s.png')

    assert serve(handler, fetch) is None
    assert 'UpstreamRejectedError' in caplog.text
