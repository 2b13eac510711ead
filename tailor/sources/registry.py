from tailor.sources import capes, skins  # registers sources
from tailor.sources.sources import SkinSource

known_sources = {x.id: x() for x in SkinSource.known()}


def from_known_string(string: str) -> SkinSource:
    try:
        return known_sources[string]
    except KeyError:
        raise ValueError(f'Unknown skin source: {string}')
