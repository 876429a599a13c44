"""
:py:mod:`hal_serde.strategies` contains the built-in :py:class:`Strategy` implementations,
one for each built-in :py:class:`Metadata` variant.
"""
import abc
import collections.abc
import logging
import typing
from collections import OrderedDict

from .builders import HalResourceBuilder
from .exceptions import UnexpectedMetadataTypeError
from .interfaces import PaginatedCollection, RequestContext, Strategy
from .links import merge_query_string
from .metadata import (
    CollectionMetadata,
    Metadata,
    PaginationPlacement,
    ResourceMetadata,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
from .models import HalResource, Link
from .pagination import compute_page_links

logger = logging.getLogger(__name__)

Tmeta = typing.TypeVar("Tmeta", bound=Metadata)


def _expect(metadata: Metadata, class_: typing.Type[Tmeta]) -> Tmeta:
    if not isinstance(metadata, class_):
        raise UnexpectedMetadataTypeError(metadata, expected=(class_,))
    return metadata


class InstanceStrategy(Strategy, metaclass=abc.ABCMeta):
    """
    The base for strategies that represent a single native object.  The extracted properties
    become the data of the resource, except for those holding objects the generator knows
    how to represent, which get embedded.
    """

    metadata_class: typing.ClassVar[typing.Type[ResourceMetadata]]

    @abc.abstractmethod
    def build_self_link(
        self,
        instance: typing.Any,
        data: typing.MutableMapping[str, typing.Any],
        metadata: ResourceMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        ...  # pragma: nocover

    def is_embeddable(self, generator: "ResourceGenerator", value: typing.Any) -> bool:
        if value is None or isinstance(value, (str, bytes, collections.abc.Mapping)):
            return False
        if generator.can_generate(value):
            return True
        if isinstance(value, collections.abc.Sequence):
            return len(value) > 0 and all(
                v is not None and generator.can_generate(v) for v in value
            )
        return False

    def extract_instance(
        self,
        instance: typing.Any,
        metadata: ResourceMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
        depth: int,
        builder: HalResourceBuilder,
    ) -> None:
        for name, value in list(builder.data.items()):
            if not self.is_embeddable(generator, value):
                continue
            del builder.data[name]
            if depth >= metadata.max_depth:
                logger.debug(
                    "not embedding %s of %s; depth %d reached the limit",
                    name,
                    type(instance).__name__,
                    depth,
                )
                continue
            if generator.can_generate(value):
                builder.embed(name, generator.from_object(value, request, depth + 1))
            else:
                builder.embed(
                    name, tuple(generator.from_object(v, request, depth + 1) for v in value)
                )

    def create_resource(
        self,
        instance: typing.Any,
        metadata: Metadata,
        generator: "ResourceGenerator",
        request: RequestContext,
        depth: int = 0,
    ) -> HalResource:
        metadata = _expect(metadata, self.metadata_class)
        data: typing.MutableMapping[str, typing.Any] = OrderedDict(
            generator.get_extractor(metadata.extractor).extract(instance)
        )
        builder = HalResourceBuilder()
        builder.add_link(self.build_self_link(instance, data, metadata, generator, request))
        builder.data.update(data)
        self.extract_instance(instance, metadata, generator, request, depth, builder)
        return builder()


class RouteBasedResourceStrategy(InstanceStrategy):
    metadata_class = RouteBasedResourceMetadata

    def build_self_link(
        self,
        instance: typing.Any,
        data: typing.MutableMapping[str, typing.Any],
        metadata: ResourceMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        assert isinstance(metadata, RouteBasedResourceMetadata)
        route_params = OrderedDict(metadata.route_params)
        identifier = metadata.resource_identifier
        if identifier in data:
            route_params[metadata.route_identifier_placeholder] = data[identifier]
            if not metadata.identifier_as_data:
                del data[identifier]
        elif hasattr(instance, identifier):
            route_params[metadata.route_identifier_placeholder] = getattr(instance, identifier)
        return generator.link_generator.from_route("self", request, metadata.route, route_params)


class UrlBasedResourceStrategy(InstanceStrategy):
    metadata_class = UrlBasedResourceMetadata

    def build_self_link(
        self,
        instance: typing.Any,
        data: typing.MutableMapping[str, typing.Any],
        metadata: ResourceMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        assert isinstance(metadata, UrlBasedResourceMetadata)
        return generator.link_generator.from_url("self", metadata.url)


class CollectionStrategy(Strategy, metaclass=abc.ABCMeta):
    """
    The base for strategies that represent a collection of native objects.  Each member is
    generated by the generator and embedded under the metadata's collection relation.
    A :py:class:`PaginatedCollection` additionally gets ``first``, ``prev``, ``next``, and
    ``last`` links.
    """

    metadata_class: typing.ClassVar[typing.Type[CollectionMetadata]]

    @abc.abstractmethod
    def build_link(
        self,
        rel: str,
        page: typing.Optional[int],
        metadata: CollectionMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        """
        Builds a link of the relation ``rel`` to the page numbered ``page``, or to the
        collection itself if ``page`` is :py:const:`None`.
        """
        ...  # pragma: nocover

    def create_resource(
        self,
        instance: typing.Any,
        metadata: Metadata,
        generator: "ResourceGenerator",
        request: RequestContext,
        depth: int = 0,
    ) -> HalResource:
        metadata = _expect(metadata, self.metadata_class)
        builder = HalResourceBuilder()
        if isinstance(instance, PaginatedCollection):
            page_links = compute_page_links(instance)
            for rel, page in page_links.items():
                builder.add_link(self.build_link(rel, page, metadata, generator, request))
            builder.data["_total_items"] = instance.total_item_count
            builder.data["_page"] = page_links.self_
            builder.data["_page_count"] = page_links.page_count
            members = [generator.from_object(item, request, depth + 1) for item in instance]
        else:
            if not isinstance(instance, collections.abc.Iterable):
                raise TypeError(f"{type(instance).__name__} is not iterable")
            builder.add_link(self.build_link("self", None, metadata, generator, request))
            members = [generator.from_object(item, request, depth + 1) for item in instance]
            builder.data["_total_items"] = (
                len(instance) if isinstance(instance, collections.abc.Sized) else len(members)
            )
        builder.embed(metadata.collection_relation, tuple(members))
        return builder()


class RouteBasedCollectionStrategy(CollectionStrategy):
    metadata_class = RouteBasedCollectionMetadata

    def build_link(
        self,
        rel: str,
        page: typing.Optional[int],
        metadata: CollectionMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        assert isinstance(metadata, RouteBasedCollectionMetadata)
        route_params = OrderedDict(metadata.route_params)
        query_params = OrderedDict(metadata.query_string_arguments)
        if page is not None:
            if metadata.pagination_param_type is PaginationPlacement.PLACEHOLDER:
                route_params[metadata.pagination_param] = page
            else:
                query_params[metadata.pagination_param] = page
        return generator.link_generator.from_route(
            rel, request, metadata.route, route_params, query_params
        )


class UrlBasedCollectionStrategy(CollectionStrategy):
    metadata_class = UrlBasedCollectionMetadata

    def build_link(
        self,
        rel: str,
        page: typing.Optional[int],
        metadata: CollectionMetadata,
        generator: "ResourceGenerator",
        request: RequestContext,
    ) -> Link:
        assert isinstance(metadata, UrlBasedCollectionMetadata)
        url = metadata.url
        if page is not None:
            if metadata.pagination_param_type is PaginationPlacement.PLACEHOLDER:
                url = url.replace("{" + metadata.pagination_param + "}", str(page))
            else:
                url = merge_query_string(url, {metadata.pagination_param: page})
        return generator.link_generator.from_url(rel, url)


if typing.TYPE_CHECKING:
    from .generator import ResourceGenerator  # noqa: E402
