import dataclasses
import math
import typing

from .exceptions import InvalidPaginationError
from .interfaces import PaginatedCollection


class Page(PaginatedCollection):
    """
    A :py:class:`Page` is a ready-made :py:class:`PaginatedCollection` over a sequence
    holding the members of the current page.  Subclass it to give collections of
    a particular kind their own class, so that they get their own metadata:

    .. code-block:: python

       class BookCollection(Page):
           pass

       BookCollection(books[10:20], current_page=2, page_size=10, total_item_count=len(books))

    """

    items: typing.Sequence[typing.Any]
    _current_page: int
    _page_size: int
    _total_item_count: int

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_item_count(self) -> int:
        return self._total_item_count

    def __iter__(self) -> typing.Iterator[typing.Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(<{len(self.items)} items>, current_page={self._current_page}, "
            f"page_size={self._page_size}, total_item_count={self._total_item_count})"
        )

    @classmethod
    def slice(
        cls, items: typing.Sequence[typing.Any], current_page: int, page_size: int
    ) -> "Page":
        """
        Builds the page numbered ``current_page`` out of the whole result set ``items``.
        """
        start = (current_page - 1) * page_size
        return cls(
            items[start : start + page_size],
            current_page=current_page,
            page_size=page_size,
            total_item_count=len(items),
        )

    def __init__(
        self,
        items: typing.Iterable[typing.Any],
        current_page: int = 1,
        page_size: typing.Optional[int] = None,
        total_item_count: typing.Optional[int] = None,
    ):
        self.items = tuple(items)
        self._current_page = current_page
        self._page_size = page_size if page_size is not None else max(len(self.items), 1)
        self._total_item_count = (
            total_item_count if total_item_count is not None else len(self.items)
        )


@dataclasses.dataclass(frozen=True)
class PageLinks:
    """
    Page numbers each pagination relation points to; :py:const:`None` when the relation
    is not to be emitted.
    """

    self_: int
    page_count: int
    first: typing.Optional[int] = None
    prev: typing.Optional[int] = None
    next: typing.Optional[int] = None
    last: typing.Optional[int] = None

    def items(self) -> typing.Iterator[typing.Tuple[str, int]]:
        yield "self", self.self_
        for rel in ("first", "prev", "next", "last"):
            page = getattr(self, rel)
            if page is not None:
                yield rel, page


def count_pages(total_item_count: int, page_size: int) -> int:
    if page_size < 1:
        raise InvalidPaginationError(f"page size must be a positive integer, got {page_size}")
    if total_item_count < 0:
        raise InvalidPaginationError(
            f"total item count must not be negative, got {total_item_count}"
        )
    return math.ceil(total_item_count / page_size)


def compute_page_links(collection: PaginatedCollection) -> PageLinks:
    """
    Computes the pages the ``self``, ``first``, ``prev``, ``next``, and ``last`` relations of
    ``collection`` point to.  Relations whose page falls outside ``1..page_count`` are omitted;
    ``self`` is always present.
    """
    current = collection.current_page
    if current < 1:
        raise InvalidPaginationError(f"page number must be a positive integer, got {current}")
    page_count = count_pages(collection.total_item_count, collection.page_size)

    def in_range(page: int) -> typing.Optional[int]:
        return page if 1 <= page <= page_count else None

    return PageLinks(
        self_=current,
        page_count=page_count,
        first=in_range(1),
        prev=in_range(current - 1),
        next=in_range(current + 1),
        last=in_range(page_count),
    )
