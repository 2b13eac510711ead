from aiohttp import ClientResponseError


class SkinError(RuntimeError):
    pass


class InvalidFormatError(SkinError):
    def __init__(self, path, file_type=None):
        self.path = path
        self.file_type = file_type
        super().__init__(f'{path} is not a PNG image (file type byte: {file_type})')


class InvalidDimensionsError(SkinError):
    def __init__(self, path, width, height):
        self.path = path
        self.width = width
        self.height = height
        super().__init__(f'Image dimensions are not 64x64 or 64x32! The actual format is: {width}x{height}')


class TransportError(SkinError):
    def __init__(self, endpoint, reason):
        self.endpoint = endpoint
        super().__init__(f'Request to {endpoint} failed: {reason}')


class UpstreamRejectedError(SkinError):
    def __init__(self, endpoint, reply=None):
        self.endpoint = endpoint
        self.reply = reply
        super().__init__(f'{endpoint} did not return a signed skin. Reply: {reply!r}')


class DecodeError(ValueError):
    pass


APIError = ClientResponseError
