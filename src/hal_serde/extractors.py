import dataclasses
import logging
import typing
from collections import OrderedDict

from .exceptions import ExtractionError
from .interfaces import Extractor

logger = logging.getLogger(__name__)


class ObjectPropertyExtractor(Extractor):
    """
    Extracts the public instance attributes of an object, in definition order.
    """

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        try:
            attrs = vars(instance)
        except TypeError:
            raise ExtractionError(f"{type(instance).__name__} has no instance attributes")
        return OrderedDict((k, v) for k, v in attrs.items() if not k.startswith("_"))


class DataclassExtractor(Extractor):
    """
    Extracts the fields of a dataclass instance.  Unlike :py:func:`dataclasses.asdict`,
    field values are not copied nor recursed into, so that nested objects remain
    available for embedding.
    """

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        if not dataclasses.is_dataclass(instance) or isinstance(instance, type):
            raise ExtractionError(f"{type(instance).__name__} is not a dataclass instance")
        return OrderedDict(
            (f.name, getattr(instance, f.name)) for f in dataclasses.fields(instance)
        )


class CallableExtractor(Extractor):
    func: typing.Callable[[typing.Any], typing.Mapping[str, typing.Any]]

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        return self.func(instance)

    def __init__(self, func: typing.Callable[[typing.Any], typing.Mapping[str, typing.Any]]):
        self.func = func


ExtractorLike = typing.Union[Extractor, typing.Callable[[typing.Any], typing.Mapping[str, typing.Any]]]


class ExtractorRegistry:
    """
    An :py:class:`ExtractorRegistry` looks up extractors by the names metadata refers to them.
    ``object_property`` and ``dataclass`` are available out of the box.
    """

    _extractors: typing.Dict[str, Extractor]

    def add(self, name: str, extractor: ExtractorLike) -> None:
        if not isinstance(extractor, Extractor):
            if not callable(extractor):
                raise TypeError(f"{extractor!r} is neither an Extractor nor a callable")
            extractor = CallableExtractor(extractor)
        logger.debug("registering extractor %s: %r", name, extractor)
        self._extractors[name] = extractor

    def get(self, name: str) -> Extractor:
        try:
            return self._extractors[name]
        except KeyError:
            raise ExtractionError(f"no extractor named {name}")

    def __contains__(self, name: typing.Any) -> bool:
        return name in self._extractors

    def __init__(self, extractors: typing.Optional[typing.Mapping[str, ExtractorLike]] = None):
        self._extractors = {
            "object_property": ObjectPropertyExtractor(),
            "dataclass": DataclassExtractor(),
        }
        for name, extractor in (extractors or {}).items():
            self.add(name, extractor)
