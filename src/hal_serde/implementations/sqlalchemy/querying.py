import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ...interfaces import PaginatedCollection

Statement = typing.Union[orm.Query, sa.sql.Select]


class QueryPage(PaginatedCollection):
    """
    A :py:class:`QueryPage` is a :py:class:`PaginatedCollection` that fetches a single page
    of the rows a query yields.  Both an ORM :py:class:`sqlalchemy.orm.Query` and a
    :py:func:`sqlalchemy.select` statement (run against ``session``) are accepted.

    The total count and the rows are fetched on first access and memoized.
    Subclass it to register metadata for a particular kind of query result.
    """

    session: typing.Optional[orm.Session]
    statement: Statement
    _current_page: int
    _page_size: int
    _total_item_count: typing.Optional[int] = None
    _items: typing.Optional[typing.List[typing.Any]] = None

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def offset(self) -> int:
        return (self._current_page - 1) * self._page_size

    @property
    def total_item_count(self) -> int:
        if self._total_item_count is None:
            if isinstance(self.statement, orm.Query):
                self._total_item_count = self.statement.order_by(None).count()
            else:
                assert self.session is not None
                self._total_item_count = self.session.scalar(
                    sa.select(sa.func.count()).select_from(
                        self.statement.order_by(None).subquery()
                    )
                )
        return typing.cast(int, self._total_item_count)

    @property
    def items(self) -> typing.Sequence[typing.Any]:
        if self._items is None:
            if isinstance(self.statement, orm.Query):
                self._items = self.statement.offset(self.offset).limit(self._page_size).all()
            else:
                assert self.session is not None
                self._items = list(
                    self.session.scalars(
                        self.statement.offset(self.offset).limit(self._page_size)
                    )
                )
        return self._items

    def __iter__(self) -> typing.Iterator[typing.Any]:
        return iter(self.items)

    def __init__(
        self,
        statement: Statement,
        session: typing.Optional[orm.Session] = None,
        current_page: int = 1,
        page_size: int = 20,
    ):
        if not isinstance(statement, orm.Query) and session is None:
            raise ValueError("session must be given along with a select statement")
        self.statement = statement
        self.session = session
        self._current_page = current_page
        self._page_size = page_size
