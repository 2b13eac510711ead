import asyncio
import urllib.parse

import aiohttp
from marshmallow import EXCLUDE, Schema, post_load
from marshmallow.schema import SchemaMeta

from tailor.config import request_timeout, user_agent
from tailor.exceptions import APIError, TransportError, UpstreamRejectedError


class ApiSchemaBase(SchemaMeta):
    def __new__(cls, name, bases, attrs):
        paths = attrs.pop('__endpoints__', None)
        endpoints = []

        for base in bases:
            if isinstance(base, ApiSchemaBase):
                for endpoint in base.__endpoints__:
                    endpoints.extend(urllib.parse.urljoin(endpoint, path) for path in (paths if paths else ['']))

        if not endpoints and paths:
            endpoints = paths

        attrs['__endpoints__'] = endpoints
        return super().__new__(cls, name, bases, attrs)


class ApiData(dict):
    def __getattr__(self, attr):
        try:
            return self[attr]
        except KeyError:
            raise AttributeError(attr)


class ApiSchema(Schema, metaclass=ApiSchemaBase):
    class Meta:
        unknown = EXCLUDE

    def __init__(self, params=None, query=None, **kwargs):
        super().__init__(**kwargs)

        self._params = params if params else {}
        self._query = query if query else {}

    def endpoint_url(self) -> str:
        for endpoint in self.__endpoints__:
            try:
                url = endpoint.format(
                    **{k: urllib.parse.quote(str(v), safe='') for k, v in self._params.items() if v is not None})
            except KeyError:
                continue

            if query := urllib.parse.urlencode(self._query):
                url += '?' + query

            return url

        raise ValueError(f'No endpoint of {type(self).__name__} accepts parameters {sorted(self._params)}')

    async def api_request(self, method: str, url: str, **kwargs) -> str:
        headers = kwargs.setdefault('headers', {})
        headers.setdefault('User-Agent', user_agent())
        headers.setdefault('Cache-Control', 'no-cache')
        headers.setdefault('Pragma', 'no-cache')

        timeout = aiohttp.ClientTimeout(total=request_timeout())

        try:
            async with aiohttp.ClientSession(raise_for_status=True, timeout=timeout) as s:
                async with s.request(method, url, **kwargs) as r:
                    return await r.text(errors='replace')
        except APIError as e:
            if handler := getattr(self, f'api_{method.lower()}_{e.status}', None):
                return handler()
            raise UpstreamRejectedError(url, f'HTTP {e.status} {e.message}') from e
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise TransportError(url, e.__class__.__name__ if not str(e) else str(e)) from e

    async def api_get(self, **kwargs) -> str:
        return await self.api_request('GET', self.endpoint_url(), **kwargs)

    async def api_post(self, **kwargs) -> str:
        return await self.api_request('POST', self.endpoint_url(), **kwargs)

    @post_load
    def make_data(self, data, **kwargs):
        return ApiData(data)
