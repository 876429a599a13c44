import typing
from collections import OrderedDict

from .models import EmbeddedValue, HalResource, Link


class HalResourceBuilder:
    """
    A :py:class:`HalResourceBuilder` accumulates the parts of a resource and yields an
    immutable :py:class:`HalResource` when called.
    """

    data: "OrderedDict[str, typing.Any]"
    links: typing.List[Link]
    embedded: "OrderedDict[str, EmbeddedValue]"

    def add_data(self, name: str, value: typing.Any) -> None:
        self.data[name] = value

    def add_link(self, link: Link) -> None:
        self.links.append(link)

    def embed(
        self, rel: str, resource: typing.Union[HalResource, typing.Sequence[HalResource]]
    ) -> None:
        """
        Embeds a resource, or an ordered sequence of resources, under ``rel``.
        Embedding a single resource under a relation that already has some turns the
        relation into a sequence.
        """
        prev = self.embedded.get(rel)
        if isinstance(resource, HalResource):
            if prev is None:
                self.embedded[rel] = resource
            elif isinstance(prev, tuple):
                self.embedded[rel] = prev + (resource,)
            else:
                self.embedded[rel] = (prev, resource)
        else:
            if prev is not None:
                raise ValueError(f"relation {rel} has already got embedded resources")
            self.embedded[rel] = tuple(resource)

    def __call__(self) -> HalResource:
        return HalResource(
            data=tuple(self.data.items()),
            links=tuple(self.links),
            embedded=tuple(self.embedded.items()),
        )

    def __init__(self) -> None:
        self.data = OrderedDict()
        self.links = []
        self.embedded = OrderedDict()
