"""
:py:mod:`hal_serde.generator` provides :py:class:`ResourceGenerator`, the entry point that
turns native objects into :py:class:`HalResource` graphs.

Synopsis
--------

.. code-block:: python

   metadata_map = MetadataMap(
       [
           RouteBasedResourceMetadata(class_=Book, route="book", extractor="dataclass"),
           RouteBasedCollectionMetadata(
               class_=BookCollection, collection_relation="book", route="books"
           ),
       ]
   )
   generator = ResourceGenerator(
       metadata_map,
       LinkGenerator(TemplateUrlGenerator({"book": "/book/{id}", "books": "/books"})),
   )
   resource = generator.from_object(book, RequestContext())

"""
import logging
import types
import typing

from .deferred import Deferred
from .exceptions import MetadataNotFoundError, UnexpectedMetadataTypeError, UnknownObjectTypeError
from .extractors import ExtractorLike, ExtractorRegistry
from .interfaces import Extractor, RequestContext, Strategy
from .links import LinkGenerator
from .metadata import (
    Metadata,
    MetadataMap,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
from .models import HalResource
from .strategies import (
    RouteBasedCollectionStrategy,
    RouteBasedResourceStrategy,
    UrlBasedCollectionStrategy,
    UrlBasedResourceStrategy,
)

logger = logging.getLogger(__name__)

StrategyLike = typing.Union[
    Strategy, Deferred[Strategy], typing.Type[Strategy], typing.Callable[[], Strategy]
]


class ResourceGenerator:
    """
    A :py:class:`ResourceGenerator` resolves the metadata of a native object and hands the
    object over to the strategy registered for the kind of the metadata.  Strategies call
    back into :py:meth:`from_object` to generate the resources they embed.

    Strategies and metadata are to be registered before any generation takes place;
    generation only reads them, and can then be run from multiple threads.

    :param MetadataMap metadata_map: the metadata of the native classes.
    :param LinkGenerator link_generator: the link generator the strategies use.
    :param extractors: an :py:class:`ExtractorRegistry`, or a mapping of extractor names to extractors.
    """

    metadata_map: MetadataMap
    link_generator: LinkGenerator
    extractors: ExtractorRegistry
    _strategies: typing.Dict[str, typing.Union[Strategy, Deferred[Strategy]]]

    @property
    def strategies(self) -> typing.Mapping[str, typing.Union[Strategy, Deferred[Strategy]]]:
        return types.MappingProxyType(self._strategies)

    def add_strategy(
        self,
        metadata_type: typing.Union[str, typing.Type[Metadata]],
        strategy: StrategyLike,
    ) -> None:
        """
        Registers the strategy in charge of a kind of metadata, replacing any strategy
        previously registered for it.

        :param metadata_type: a :py:class:`Metadata` subclass, or its discriminator.
        :param strategy: a :py:class:`Strategy`, or a :py:class:`Deferred` or a zero-argument
                         callable (a :py:class:`Strategy` subclass included) that yields one
                         the first time it is needed.
        """
        if isinstance(metadata_type, str):
            discriminator = metadata_type
        elif isinstance(metadata_type, type) and issubclass(metadata_type, Metadata):
            discriminator = metadata_type.discriminator
        else:
            raise TypeError(f"{metadata_type!r} is neither a metadata class nor a discriminator")

        if isinstance(strategy, (Strategy, Deferred)):
            entry: typing.Union[Strategy, Deferred[Strategy]] = strategy
        elif callable(strategy):
            entry = Deferred(strategy)
        else:
            raise TypeError(f"{strategy!r} is not a strategy")
        logger.debug("registering strategy for %s: %r", discriminator, entry)
        self._strategies[discriminator] = entry

    def get_strategy(self, metadata: Metadata) -> Strategy:
        """
        Returns the strategy registered for the kind of ``metadata``.

        :raises UnexpectedMetadataTypeError: if no strategy is registered for it.
        """
        try:
            entry = self._strategies[metadata.discriminator]
        except (KeyError, AttributeError):
            raise UnexpectedMetadataTypeError(metadata)
        if isinstance(entry, Deferred):
            strategy = entry()
            if not isinstance(strategy, Strategy):
                raise TypeError(
                    f"deferred strategy for {metadata.discriminator} yielded {strategy!r}"
                )
            return strategy
        return entry

    def get_extractor(self, name: str) -> Extractor:
        return self.extractors.get(name)

    def can_generate(self, instance: typing.Any) -> bool:
        return self.metadata_map.resolvable(instance)

    def from_object(
        self, instance: typing.Any, request: RequestContext, depth: int = 0
    ) -> HalResource:
        """
        Generates the resource for a native object.

        :param Any instance: The native object.
        :param RequestContext request: The context of the request being served.
        :param int depth: The embedding depth; strategies pass it incremented for nested objects.
        :return: The generated resource.
        :raises UnknownObjectTypeError: if no metadata is registered for the object's class or its ancestors.
        :raises UnexpectedMetadataTypeError: if no strategy is registered for the kind of the metadata.
        """
        try:
            metadata = self.metadata_map.resolve_for(instance)
        except MetadataNotFoundError as e:
            raise UnknownObjectTypeError(type(instance)) from e
        strategy = self.get_strategy(metadata)
        logger.debug(
            "generating %s at depth %d with %s",
            type(instance).__name__,
            depth,
            type(strategy).__name__,
        )
        return strategy.create_resource(instance, metadata, self, request, depth)

    def __init__(
        self,
        metadata_map: MetadataMap,
        link_generator: LinkGenerator,
        extractors: typing.Union[
            None, ExtractorRegistry, typing.Mapping[str, ExtractorLike]
        ] = None,
    ):
        self.metadata_map = metadata_map
        self.link_generator = link_generator
        if isinstance(extractors, ExtractorRegistry):
            self.extractors = extractors
        else:
            self.extractors = ExtractorRegistry(extractors)
        self._strategies = {}
        self.add_strategy(RouteBasedResourceMetadata, RouteBasedResourceStrategy())
        self.add_strategy(UrlBasedResourceMetadata, UrlBasedResourceStrategy())
        self.add_strategy(RouteBasedCollectionMetadata, RouteBasedCollectionStrategy())
        self.add_strategy(UrlBasedCollectionMetadata, UrlBasedCollectionStrategy())
