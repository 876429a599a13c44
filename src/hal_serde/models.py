"""
Classes in :py:mod:`hal_serde.models` are the in-memory representation of HAL documents.
Rendering them into JSON or XML is left to the consumer.
"""

import collections.abc
import dataclasses
import types
import typing
from collections import OrderedDict

from .utils import assert_not_none


@dataclasses.dataclass(frozen=True)
class Link:
    """
    :py:class:`Link` represents a single `Link Object <https://tools.ietf.org/html/draft-kelly-json-hal-08#section-5>`_.
    """

    rel: str
    href: str
    templated: bool = False
    attributes: typing.Mapping[str, typing.Any] = dataclasses.field(
        default_factory=dict, compare=False
    )
    """
    Optional link attributes such as ``type``, ``title``, ``name`` or ``hreflang``.
    """

    def with_rel(self, rel: str) -> "Link":
        return dataclasses.replace(self, rel=rel)


LinkValue = typing.Union[Link, typing.Tuple[Link, ...]]
EmbeddedValue = typing.Union["HalResource", typing.Tuple["HalResource", ...]]


def is_resource_sequence(value: typing.Any) -> bool:
    return (
        isinstance(value, collections.abc.Sequence)
        and not isinstance(value, (str, bytes))
        and len(value) > 0
        and all(isinstance(v, HalResource) for v in value)
    )


@dataclasses.dataclass(init=False)
class HalResource:
    """
    :py:class:`HalResource` represents a `Resource Object <https://tools.ietf.org/html/draft-kelly-json-hal-08#section-4>`_.

    Values in ``data`` that are resources (or non-empty sequences of resources) end up
    in ``embedded`` rather than in ``data``.
    """

    data: typing.Mapping[str, typing.Any]
    links: typing.Mapping[str, LinkValue]
    embedded: typing.Mapping[str, EmbeddedValue]

    def __getitem__(self, name: str) -> typing.Any:
        return self.data[name]

    def has_link(self, rel: str) -> bool:
        return rel in self.links

    def get_link(self, rel: str) -> Link:
        """
        Returns the only link of the relation ``rel``.

        :raises KeyError: if no link has the relation.
        :raises ValueError: if the relation is multi-valued.
        """
        link = self.links[rel]
        if isinstance(link, tuple):
            raise ValueError(f"relation {rel} carries {len(link)} links")
        return link

    def get_links(self, rel: str) -> typing.Sequence[Link]:
        link = self.links.get(rel)
        if link is None:
            return ()
        elif isinstance(link, tuple):
            return link
        else:
            return (link,)

    def get_element(self, name: str) -> typing.Any:
        """
        Returns either the data property or the embedded resource(s) named ``name``.
        """
        if name in self.data:
            return self.data[name]
        return self.embedded[name]

    def __init__(
        self,
        data: typing.Union[
            typing.Mapping[str, typing.Any], typing.Iterable[typing.Tuple[str, typing.Any]]
        ] = (),
        links: typing.Iterable[Link] = (),
        embedded: typing.Union[
            typing.Mapping[str, typing.Any], typing.Iterable[typing.Tuple[str, typing.Any]]
        ] = (),
    ):
        """
        :param data: the data properties, either as a mapping or a sequence of key-value pairs.
        :param Iterable[Link] links: the links; links sharing a relation are grouped in order.
        :param embedded: the embedded resources keyed by relation.
        """
        _data: "OrderedDict[str, typing.Any]" = OrderedDict()
        _embedded: "OrderedDict[str, EmbeddedValue]" = OrderedDict()
        items = data.items() if isinstance(data, collections.abc.Mapping) else data
        for k, v in items:
            if isinstance(v, HalResource):
                _embedded[k] = v
            elif is_resource_sequence(v):
                _embedded[k] = tuple(v)
            else:
                _data[k] = v
        items = embedded.items() if isinstance(embedded, collections.abc.Mapping) else embedded
        for k, v in items:
            if k in _data:
                raise ValueError(f"{k} is used both as a data property and an embedded resource")
            if isinstance(v, HalResource):
                _embedded[k] = v
            elif isinstance(v, collections.abc.Iterable):
                vs = tuple(v)
                for x in vs:
                    if not isinstance(x, HalResource):
                        raise TypeError(f"embedded value under {k} is not a resource: {x!r}")
                _embedded[k] = vs
            else:
                raise TypeError(f"embedded value under {k} is not a resource: {v!r}")

        _links: "OrderedDict[str, LinkValue]" = OrderedDict()
        for link in links:
            rel = assert_not_none(link.rel)
            prev = _links.get(rel)
            if prev is None:
                _links[rel] = link
            elif isinstance(prev, tuple):
                _links[rel] = prev + (link,)
            else:
                _links[rel] = (prev, link)

        self.data = types.MappingProxyType(_data)
        self.links = types.MappingProxyType(_links)
        self.embedded = types.MappingProxyType(_embedded)
