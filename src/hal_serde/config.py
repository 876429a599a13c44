"""
:py:mod:`hal_serde.config` builds :py:class:`Metadata` out of declarative records, typically
loaded from the application's configuration at startup.

Synopsis
--------

.. code-block:: python

   metadata_map = build_metadata_map(
       [
           {
               "__metadata__": "RouteBasedResourceMetadata",
               "class": "myapp.models.Book",
               "route": "book",
               "extractor": "dataclass",
           },
           {
               "__metadata__": "route_based_collection",
               "class": "myapp.models.BookCollection",
               "collection_relation": "book",
               "route": "books",
               "pagination_param_type": "query",
           },
       ]
   )

"""
import collections.abc
import dataclasses
import importlib
import logging
import typing

from .exceptions import InvalidDeclarationError
from .metadata import (
    Metadata,
    MetadataMap,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)

logger = logging.getLogger(__name__)

METADATA_KEY = "__metadata__"
CLASS_KEY = "class"

ClassResolver = typing.Callable[[str], typing.Type]

_metadata_types: typing.Dict[str, typing.Type[Metadata]] = {}


def register_metadata_type(metadata_type: typing.Type[Metadata]) -> typing.Type[Metadata]:
    """
    Makes a metadata variant available to :py:func:`metadata_from_record`, both under its
    discriminator and its class name.  Usable as a class decorator.  The variant must be a
    dataclass whose first field is the represented class.
    """
    if not dataclasses.is_dataclass(metadata_type):
        raise InvalidDeclarationError(f"{metadata_type.__name__} is not a dataclass")
    _metadata_types[metadata_type.discriminator] = metadata_type
    _metadata_types[metadata_type.__name__] = metadata_type
    return metadata_type


for _ in (
    RouteBasedResourceMetadata,
    UrlBasedResourceMetadata,
    RouteBasedCollectionMetadata,
    UrlBasedCollectionMetadata,
):
    register_metadata_type(_)


def import_class(path: str) -> typing.Type:
    module_name, _, name = path.rpartition(".")
    if not module_name:
        raise InvalidDeclarationError(f"{path} is not a dotted path to a class")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidDeclarationError(f"failed to import {module_name} ({e})") from e
    try:
        class_ = getattr(module, name)
    except AttributeError:
        raise InvalidDeclarationError(f"{module_name} has no attribute {name}")
    if not isinstance(class_, type):
        raise InvalidDeclarationError(f"{path} is not a class")
    return class_


def metadata_from_record(
    record: typing.Mapping[str, typing.Any],
    class_resolver: typing.Optional[ClassResolver] = None,
) -> Metadata:
    """
    Builds a single :py:class:`Metadata` out of a record.

    :param Mapping[str, Any] record: a mapping holding the variant under ``__metadata__``,
                                     the represented class under ``class``, and the values
                                     for the remaining fields of the variant.
    :param class_resolver: resolves class names given as strings; defaults to importing dotted paths.
    :raises InvalidDeclarationError: if the record is malformed.
    """
    if not isinstance(record, collections.abc.Mapping):
        raise InvalidDeclarationError(f"metadata record must be a mapping, got {record!r}")
    try:
        variant = record[METADATA_KEY]
    except KeyError:
        raise InvalidDeclarationError(f"metadata record lacks {METADATA_KEY}")
    try:
        metadata_type = _metadata_types[variant]
    except (KeyError, TypeError):
        raise InvalidDeclarationError(f"unknown metadata type: {variant!r}")

    try:
        class_ = record[CLASS_KEY]
    except KeyError:
        raise InvalidDeclarationError(f"metadata record for {variant} lacks {CLASS_KEY}")
    if isinstance(class_, str):
        class_ = (class_resolver or import_class)(class_)
    elif not isinstance(class_, type):
        raise InvalidDeclarationError(f"{class_!r} is not a class")

    fields = {f.name: f for f in dataclasses.fields(metadata_type) if f.init}
    class_field = next(iter(fields))
    kwargs: typing.Dict[str, typing.Any] = {class_field: class_}
    for k, v in record.items():
        if k in (METADATA_KEY, CLASS_KEY):
            continue
        if k not in fields or k == class_field:
            raise InvalidDeclarationError(f"{metadata_type.__name__} has no field named {k}")
        kwargs[k] = v

    missing = [
        name
        for name, f in fields.items()
        if name not in kwargs
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING  # type: ignore
    ]
    if missing:
        raise InvalidDeclarationError(
            f"metadata record for {class_.__name__} lacks {', '.join(missing)}"
        )
    try:
        return metadata_type(**kwargs)
    except (TypeError, ValueError) as e:
        raise InvalidDeclarationError(
            f"invalid metadata record for {class_.__name__} ({e})"
        ) from e


def build_metadata_map(
    records: typing.Iterable[typing.Mapping[str, typing.Any]],
    class_resolver: typing.Optional[ClassResolver] = None,
    metadata_map: typing.Optional[MetadataMap] = None,
) -> MetadataMap:
    """
    Populates a :py:class:`MetadataMap` (a new one unless ``metadata_map`` is given)
    with the metadata built out of ``records``.
    """
    if metadata_map is None:
        metadata_map = MetadataMap()
    for record in records:
        metadata = metadata_from_record(record, class_resolver)
        metadata_map.add(metadata)
    logger.debug("metadata map holds %d entries", len(metadata_map))
    return metadata_map
