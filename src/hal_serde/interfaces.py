"""
This module contains the interfaces of the collaborators the resource generator works with.
Extraction of native objects and URL construction are left to implementations of
:py:class:`Extractor` and :py:class:`UrlGenerator`.

"""
import abc
import dataclasses
import types
import typing

from .metadata import Metadata
from .models import HalResource


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """
    A :py:class:`RequestContext` carries request-scoped information down to link generation.
    The resource generator itself never looks into it.
    """

    base_url: str = ""
    """
    Prefixed to every generated URL, e.g. ``https://api.example.com``.
    """
    attributes: typing.Mapping[str, typing.Any] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType({})
    )
    """
    Request attributes such as matched route parameters, for custom URL generators to read.
    """


class Extractor(metaclass=abc.ABCMeta):
    """
    An :py:class:`Extractor` converts a native object into a flat mapping of property names to values.
    """

    @abc.abstractmethod
    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        """
        Extracts the properties of a native object.

        :param Any instance: A native object.
        :return: A mapping of property names to values.
        :raises ExtractionError: if the object cannot be extracted.
        """
        ...  # pragma: nocover


class UrlGenerator(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def generate(
        self,
        request: RequestContext,
        route_name: str,
        route_params: typing.Mapping[str, typing.Any],
        query_params: typing.Mapping[str, typing.Any],
    ) -> str:
        """
        Builds a URI for a named route.

        :param RequestContext request: The context of the request being served.
        :param str route_name: The name of the route.
        :param Mapping[str, Any] route_params: Values substituted for the route's placeholders.
        :param Mapping[str, Any] query_params: Query string arguments.
        :return: The URI.
        :raises LinkGenerationError: if the URI cannot be built.
        """
        ...  # pragma: nocover


class PaginatedCollection(metaclass=abc.ABCMeta):
    """
    A :py:class:`PaginatedCollection` is a collection that knows which page of a larger result
    set it holds.  Iterating over it yields the members of the current page only.
    """

    @property
    @abc.abstractmethod
    def current_page(self) -> int:
        """
        Returns the 1-based number of the page the collection holds.
        """
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def page_size(self) -> int:
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def total_item_count(self) -> int:
        """
        Returns the number of items across all pages.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def __iter__(self) -> typing.Iterator[typing.Any]:
        ...  # pragma: nocover


class Strategy(metaclass=abc.ABCMeta):
    """
    A :py:class:`Strategy` turns a native object into a :py:class:`HalResource` according
    to one kind of :py:class:`Metadata`.
    """

    @abc.abstractmethod
    def create_resource(
        self,
        instance: typing.Any,
        metadata: Metadata,
        generator: "ResourceGenerator",
        request: RequestContext,
        depth: int = 0,
    ) -> HalResource:
        """
        Creates a resource out of a native object.

        :param Any instance: The native object.
        :param Metadata metadata: The metadata resolved for the native object.
        :param ResourceGenerator generator: The generator to call back for nested objects.
        :param RequestContext request: The context of the request being served.
        :param int depth: The embedding depth of the resource, 0 for a top-level one.
        :return: The generated resource.
        :raises UnexpectedMetadataTypeError: if the metadata is of a kind the strategy does not support.
        """
        ...  # pragma: nocover


if typing.TYPE_CHECKING:
    from .generator import ResourceGenerator  # noqa: E402
