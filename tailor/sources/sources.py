from typing import Optional

from tailor.textures import SignedProperty


class SkinSource:
    id: str
    title: str
    description: str
    has_skin_models = True

    async def fetch(self, param: str, *, use_slim: bool = False,
                    current: Optional[SignedProperty] = None) -> Optional[SignedProperty]:
        raise NotImplementedError

    @classmethod
    def known(cls):
        subclasses = set()
        work = [cls]

        while work:
            parent = work.pop()
            for child in parent.__subclasses__():
                if child not in subclasses:
                    subclasses.add(child)
                    work.append(child)

        return subclasses
