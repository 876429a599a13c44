import typing
from collections import OrderedDict

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore
from sqlalchemy.orm.state import InstanceState  # type: ignore

from ...exceptions import ExtractionError
from ...interfaces import Extractor


class SQLAExtractor(Extractor):
    """
    Extracts the column attributes of an instance of a mapped class.

    :param relationships: either :py:const:`True` to include every relationship that has
                          already been loaded, or the names of relationships to include
                          (loading them if necessary).  Related objects whose class has
                          metadata of its own end up embedded.
    :param Iterable[str] exclude: attributes never to extract.
    """

    relationships: typing.Union[bool, typing.FrozenSet[str]]
    exclude: typing.FrozenSet[str]

    def _inspect(self, instance: typing.Any) -> InstanceState:
        try:
            state = sa.inspect(instance)
        except sa.exc.NoInspectionAvailable:
            raise ExtractionError(f"{type(instance).__name__} is not a mapped class")
        if not isinstance(state, InstanceState):
            raise ExtractionError(f"{instance!r} is not an instance of a mapped class")
        return state

    def _select_relationship(self, state: InstanceState, rel: orm.RelationshipProperty) -> bool:
        if rel.key in self.exclude:
            return False
        if self.relationships is True:
            return rel.key not in state.unloaded
        elif self.relationships is False:
            return False
        else:
            return rel.key in typing.cast(typing.FrozenSet[str], self.relationships)

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        state = self._inspect(instance)
        data: "OrderedDict[str, typing.Any]" = OrderedDict()
        for prop in state.mapper.column_attrs:
            if prop.key in self.exclude:
                continue
            data[prop.key] = prop.class_attribute.__get__(instance, None)
        for rel in state.mapper.relationships:
            if not self._select_relationship(state, rel):
                continue
            value = rel.class_attribute.__get__(instance, None)
            if rel.uselist and value is not None:
                value = list(value)
            data[rel.key] = value
        return data

    def __init__(
        self,
        relationships: typing.Union[bool, typing.Iterable[str]] = False,
        exclude: typing.Iterable[str] = (),
    ):
        self.relationships = (
            relationships if isinstance(relationships, bool) else frozenset(relationships)
        )
        self.exclude = frozenset(exclude)
