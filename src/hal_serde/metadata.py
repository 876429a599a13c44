"""
:py:mod:`hal_serde.metadata` holds the declarative descriptions of how a native class
is turned into a :py:class:`hal_serde.models.HalResource`, and the registry that maps
native classes to those descriptions.

Synopsis
--------

.. code-block:: python

   metadata_map = MetadataMap()
   metadata_map.add(
       RouteBasedResourceMetadata(
           class_=Book,
           route="book",
           extractor="dataclass",
       )
   )
   metadata_map.resolve_for(Book(id=42, title="Dune"))

"""

import abc
import dataclasses
import enum
import logging
import types
import typing
from collections import OrderedDict

from .exceptions import MetadataNotFoundError

logger = logging.getLogger(__name__)


class PaginationPlacement(enum.Enum):
    QUERY = "query"
    """The page number is carried as a query string argument"""
    PLACEHOLDER = "path-placeholder"
    """The page number is substituted into the route's path template"""

    @classmethod
    def _missing_(cls, value):
        if value == "placeholder":
            return cls.PLACEHOLDER
        return None


def _freeze(
    value: typing.Union[None, typing.Mapping[str, typing.Any], typing.Iterable[typing.Tuple[str, typing.Any]]]
) -> typing.Mapping[str, typing.Any]:
    if value is None:
        return types.MappingProxyType(OrderedDict())
    return types.MappingProxyType(OrderedDict(value))


class Metadata(metaclass=abc.ABCMeta):
    """
    A :py:class:`Metadata` describes how instances of a single native class are represented.

    Every concrete variant carries a stable ``discriminator`` by which
    :py:class:`hal_serde.generator.ResourceGenerator` picks the strategy in charge.
    """

    discriminator: typing.ClassVar[str]

    @property
    @abc.abstractmethod
    def represented_class(self) -> typing.Type:
        """
        Returns the native class this metadata describes.
        """
        ...  # pragma: nocover


@dataclasses.dataclass(frozen=True)
class ResourceMetadata(Metadata):
    """
    The base for metadata describing a single instance.
    """

    class_: typing.Type
    extractor: str
    max_depth: int = 10
    """
    Resources generated at this embedding depth or deeper embed nothing.
    """

    @property
    def represented_class(self) -> typing.Type:
        return self.class_


@dataclasses.dataclass(frozen=True)
class RouteBasedResourceMetadata(ResourceMetadata):
    discriminator: typing.ClassVar[str] = "route_based_resource"

    route: str = ""
    resource_identifier: str = "id"
    """The property of the extracted data (or the instance) that identifies the resource"""
    route_identifier_placeholder: str = "id"
    """The route parameter the identifier gets substituted for"""
    route_params: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)
    identifier_as_data: bool = False
    """Set to True to keep the identifier in the data once it has been used for routing"""

    def __post_init__(self):
        if not self.route:
            raise ValueError("route must be specified")
        object.__setattr__(self, "route_params", _freeze(self.route_params))


@dataclasses.dataclass(frozen=True)
class UrlBasedResourceMetadata(ResourceMetadata):
    discriminator: typing.ClassVar[str] = "url_based_resource"

    url: str = ""

    def __post_init__(self):
        if not self.url:
            raise ValueError("url must be specified")


@dataclasses.dataclass(frozen=True)
class CollectionMetadata(Metadata):
    """
    The base for metadata describing a collection of instances.
    """

    class_: typing.Type
    collection_relation: str
    pagination_param: str = "page"
    pagination_param_type: PaginationPlacement = PaginationPlacement.QUERY

    @property
    def represented_class(self) -> typing.Type:
        return self.class_

    def __post_init__(self):
        if not isinstance(self.pagination_param_type, PaginationPlacement):
            object.__setattr__(
                self, "pagination_param_type", PaginationPlacement(self.pagination_param_type)
            )


@dataclasses.dataclass(frozen=True)
class RouteBasedCollectionMetadata(CollectionMetadata):
    discriminator: typing.ClassVar[str] = "route_based_collection"

    route: str = ""
    route_params: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)
    query_string_arguments: typing.Mapping[str, typing.Any] = dataclasses.field(
        default_factory=dict
    )

    def __post_init__(self):
        super().__post_init__()
        if not self.route:
            raise ValueError("route must be specified")
        object.__setattr__(self, "route_params", _freeze(self.route_params))
        object.__setattr__(self, "query_string_arguments", _freeze(self.query_string_arguments))


@dataclasses.dataclass(frozen=True)
class UrlBasedCollectionMetadata(CollectionMetadata):
    discriminator: typing.ClassVar[str] = "url_based_collection"

    url: str = ""

    def __post_init__(self):
        super().__post_init__()
        if not self.url:
            raise ValueError("url must be specified")


class MetadataMap:
    """
    A :py:class:`MetadataMap` resolves native classes to their :py:class:`Metadata`.

    Registration is meant to happen once at configuration time; resolution only reads
    the map afterwards.
    """

    _map: "OrderedDict[typing.Type, Metadata]"

    def add(self, metadata: Metadata) -> None:
        """
        Registers the metadata under the class it represents.  A previous registration
        for the very same class is replaced.

        :param Metadata metadata: the metadata to register.
        """
        class_ = metadata.represented_class
        if class_ in self._map:
            logger.debug("replacing metadata for %s", class_.__qualname__)
            del self._map[class_]
        self._map[class_] = metadata

    def has(self, class_: typing.Type) -> bool:
        return class_ in self._map

    def get(self, class_: typing.Type) -> Metadata:
        """
        Returns the metadata registered for exactly ``class_``.

        :raises MetadataNotFoundError: if nothing is registered for the class.
        """
        try:
            return self._map[class_]
        except KeyError:
            raise MetadataNotFoundError(class_)

    def candidates_for(self, class_: typing.Type) -> typing.Iterator[typing.Type]:
        """
        Yields the classes consulted when resolving ``class_``, in order: the class itself
        and its ancestors in method resolution order, then the registered classes the class
        is only a virtual subclass of (ABCs it has been ``register()``-ed to), in registration
        order.  :py:class:`object` always comes last.
        """
        seen: typing.Set[typing.Type] = {object}
        for c in class_.__mro__:
            if c is object:
                continue
            seen.add(c)
            yield c
        for registered in list(self._map):
            if registered in seen:
                continue
            try:
                if issubclass(class_, registered):
                    yield registered
            except TypeError:
                continue
        yield object

    def resolve_for(self, instance: typing.Any) -> Metadata:
        """
        Returns the metadata for the runtime type of ``instance``, falling back to the
        metadata of its nearest registered ancestor.

        :raises MetadataNotFoundError: if neither the type nor its ancestors are registered.
        """
        class_ = type(instance)
        for c in self.candidates_for(class_):
            metadata = self._map.get(c)
            if metadata is not None:
                return metadata
        raise MetadataNotFoundError(class_)

    def resolvable(self, instance: typing.Any) -> bool:
        return any(c in self._map for c in self.candidates_for(type(instance)))

    def __contains__(self, class_: typing.Any) -> bool:
        return class_ in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> typing.Iterator[Metadata]:
        return iter(self._map.values())

    def __init__(self, metadata: typing.Iterable[Metadata] = ()):
        self._map = OrderedDict()
        for m in metadata:
            self.add(m)
