import pytest

from ..exceptions import InvalidPaginationError
from ..interfaces import RequestContext
from ..metadata import (
    PaginationPlacement,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
from .testing import (
    Author,
    Book,
    BookCollection,
    Node,
    PagedBookCollection,
    build_generator,
)


def make_books(n):
    return [Book(id=i, title=f"book {i}") for i in range(1, n + 1)]


class TestRouteBasedCollectionStrategy:
    @pytest.fixture
    def request_context(self):
        return RequestContext()

    @pytest.fixture
    def target(self):
        return build_generator()

    def test_single_page(self, target, request_context):
        result = target.from_object(BookCollection.slice(make_books(3), 1, 10), request_context)
        assert result.get_link("self").href == "/books?page=1"
        assert result.get_link("first").href == "/books?page=1"
        assert result.get_link("last").href == "/books?page=1"
        assert not result.has_link("prev")
        assert not result.has_link("next")
        assert result["_total_items"] == 3
        assert result["_page"] == 1
        assert result["_page_count"] == 1
        assert len(result.embedded["book"]) == 3

    def test_first_page(self, target, request_context):
        result = target.from_object(BookCollection.slice(make_books(25), 1, 10), request_context)
        assert not result.has_link("prev")
        assert result.get_link("next").href == "/books?page=2"
        assert result.get_link("last").href == "/books?page=3"

    def test_last_page(self, target, request_context):
        result = target.from_object(BookCollection.slice(make_books(25), 3, 10), request_context)
        assert result.get_link("prev").href == "/books?page=2"
        assert not result.has_link("next")
        assert [m.get_link("self").href for m in result.embedded["book"]] == [
            f"/book/{i}" for i in range(21, 26)
        ]

    def test_page_out_of_range(self, target, request_context):
        result = target.from_object(
            BookCollection([], current_page=5, page_size=10, total_item_count=25),
            request_context,
        )
        assert result.get_link("self").href == "/books?page=5"
        assert result.get_link("first").href == "/books?page=1"
        assert result.get_link("last").href == "/books?page=3"
        assert not result.has_link("prev")
        assert not result.has_link("next")
        assert result.embedded["book"] == ()

    def test_empty(self, target, request_context):
        result = target.from_object(
            BookCollection([], current_page=1, page_size=10, total_item_count=0),
            request_context,
        )
        assert result.get_link("self").href == "/books?page=1"
        assert set(result.links) == {"self"}
        assert result["_page_count"] == 0
        assert result.embedded["book"] == ()

    def test_invalid_page(self, target, request_context):
        with pytest.raises(InvalidPaginationError):
            target.from_object(
                BookCollection([], current_page=0, page_size=10, total_item_count=0),
                request_context,
            )
        with pytest.raises(InvalidPaginationError):
            target.from_object(
                BookCollection([], current_page=1, page_size=0, total_item_count=0),
                request_context,
            )

    def test_placeholder(self, target, request_context):
        result = target.from_object(
            PagedBookCollection.slice(make_books(25), 2, 10), request_context
        )
        assert result.get_link("self").href == "/books/page/2"
        assert result.get_link("prev").href == "/books/page/1"
        assert result.get_link("next").href == "/books/page/3"

    def test_query_string_arguments_are_merged(self, target, request_context):
        target.metadata_map.add(
            RouteBasedCollectionMetadata(
                class_=BookCollection,
                collection_relation="book",
                route="books",
                query_string_arguments={"sort": "title", "page": 99},
            )
        )
        result = target.from_object(BookCollection.slice(make_books(25), 2, 10), request_context)
        assert result.get_link("self").href == "/books?sort=title&page=2"
        assert result.get_link("next").href == "/books?sort=title&page=3"

    def test_route_params(self, target, request_context):
        target.link_generator.url_generator.routes["author_books"] = "/author/{author_id}/books"
        target.metadata_map.add(
            RouteBasedCollectionMetadata(
                class_=BookCollection,
                collection_relation="book",
                route="author_books",
                route_params={"author_id": 5},
            )
        )
        result = target.from_object(BookCollection.slice(make_books(5), 1, 2), request_context)
        assert result.get_link("self").href == "/author/5/books?page=1"
        assert result.get_link("last").href == "/author/5/books?page=3"

    def test_plain_iterable(self, target, request_context):
        class BookList(list):
            pass

        target.metadata_map.add(
            RouteBasedCollectionMetadata(class_=BookList, collection_relation="book", route="books")
        )
        result = target.from_object(BookList(make_books(4)), request_context)
        assert result.get_link("self").href == "/books"
        assert set(result.links) == {"self"}
        assert result["_total_items"] == 4
        assert [m["title"] for m in result.embedded["book"]] == [f"book {i}" for i in range(1, 5)]

    def test_plain_iterator(self, target, request_context):
        class BookStream:
            def __init__(self, books):
                self.books = books

            def __iter__(self):
                return iter(self.books)

        target.metadata_map.add(
            RouteBasedCollectionMetadata(
                class_=BookStream, collection_relation="book", route="books"
            )
        )
        result = target.from_object(BookStream(make_books(2)), request_context)
        assert result["_total_items"] == 2


class TestUrlBasedCollectionStrategy:
    @pytest.fixture
    def request_context(self):
        return RequestContext()

    @pytest.fixture
    def target(self):
        return build_generator()

    def test_query(self, target, request_context):
        target.metadata_map.add(
            UrlBasedCollectionMetadata(
                class_=BookCollection,
                collection_relation="book",
                url="https://example.com/books?sort=title#top",
                pagination_param="p",
            )
        )
        result = target.from_object(BookCollection.slice(make_books(25), 2, 10), request_context)
        assert result.get_link("self").href == "https://example.com/books?sort=title&p=2#top"
        assert result.get_link("prev").href == "https://example.com/books?sort=title&p=1#top"
        assert result.get_link("last").href == "https://example.com/books?sort=title&p=3#top"

    def test_query_replaces_existing_page(self, target, request_context):
        target.metadata_map.add(
            UrlBasedCollectionMetadata(
                class_=BookCollection,
                collection_relation="book",
                url="/books?page=1",
            )
        )
        result = target.from_object(BookCollection.slice(make_books(25), 2, 10), request_context)
        assert result.get_link("self").href == "/books?page=2"

    def test_placeholder(self, target, request_context):
        target.metadata_map.add(
            UrlBasedCollectionMetadata(
                class_=BookCollection,
                collection_relation="book",
                url="/books/page/{page}",
                pagination_param_type=PaginationPlacement.PLACEHOLDER,
            )
        )
        result = target.from_object(BookCollection.slice(make_books(25), 2, 10), request_context)
        assert result.get_link("self").href == "/books/page/2"
        assert result.get_link("first").href == "/books/page/1"
        assert result.get_link("next").href == "/books/page/3"

    def test_plain_iterable(self, target, request_context):
        class BookList(list):
            pass

        target.metadata_map.add(
            UrlBasedCollectionMetadata(class_=BookList, collection_relation="book", url="/books")
        )
        result = target.from_object(BookList(make_books(2)), request_context)
        assert result.get_link("self").href == "/books"
        assert len(result.embedded["book"]) == 2


class TestUrlBasedResourceStrategy:
    def test_it(self):
        target = build_generator()
        target.metadata_map.add(
            UrlBasedResourceMetadata(
                class_=Author, url="https://example.com/authors/me", extractor="dataclass"
            )
        )
        result = target.from_object(Author(id=1, name="Frank Herbert"), RequestContext())
        assert result.get_link("self").href == "https://example.com/authors/me"
        assert result["id"] == 1


class TestEmbeddingDepth:
    @pytest.fixture
    def target(self):
        target = build_generator()
        target.metadata_map.add(
            RouteBasedResourceMetadata(class_=Node, route="node", extractor="dataclass", max_depth=3)
        )
        return target

    def test_cycle_terminates(self, target):
        root = Node(id=1)
        child = Node(id=2, parent=root)
        root.children.append(child)
        result = target.from_object(root, RequestContext())
        assert result.get_link("self").href == "/node/1"
        # root -> child -> root -> child, where the depth limit is reached
        level1 = result.embedded["children"][0]
        level2 = level1.embedded["parent"]
        level3 = level2.embedded["children"][0]
        assert level1.get_link("self").href == "/node/2"
        assert level2.get_link("self").href == "/node/1"
        assert level3.get_link("self").href == "/node/2"
        assert dict(level3.embedded) == {}
        assert "parent" not in level3.data

    def test_chain_within_limit(self, target):
        leaf = Node(id=3)
        middle = Node(id=2, children=[leaf])
        root = Node(id=1, children=[middle])
        result = target.from_object(root, RequestContext())
        middle_resource = result.embedded["children"][0]
        leaf_resource = middle_resource.embedded["children"][0]
        assert leaf_resource.get_link("self").href == "/node/3"
        assert leaf_resource["children"] == []
