import pytest

from ..builders import HalResourceBuilder
from ..models import HalResource, Link


class TestHalResource:
    def test_resources_in_data_are_embedded(self):
        child = HalResource(data={"id": 1})
        result = HalResource(
            data=[("id", 42), ("author", child), ("chapters", [child, child]), ("tags", [])],
        )
        assert dict(result.data) == {"id": 42, "tags": []}
        assert result.embedded["author"] is child
        assert result.embedded["chapters"] == (child, child)

    def test_data_order_is_kept(self):
        result = HalResource(data=[("b", 1), ("a", 2), ("c", 3)])
        assert list(result.data) == ["b", "a", "c"]

    def test_links_are_grouped(self):
        result = HalResource(
            links=[
                Link(rel="self", href="/a"),
                Link(rel="item", href="/1"),
                Link(rel="item", href="/2"),
                Link(rel="item", href="/3"),
            ]
        )
        assert result.get_link("self").href == "/a"
        assert [l.href for l in result.get_links("item")] == ["/1", "/2", "/3"]
        assert result.get_links("next") == ()
        with pytest.raises(ValueError):
            result.get_link("item")
        with pytest.raises(KeyError):
            result.get_link("next")

    def test_conflicting_names(self):
        with pytest.raises(ValueError):
            HalResource(data={"a": 1}, embedded={"a": HalResource()})

    def test_invalid_embedded(self):
        with pytest.raises(TypeError):
            HalResource(embedded={"a": 1})
        with pytest.raises(TypeError):
            HalResource(embedded={"a": [HalResource(), "x"]})

    def test_get_element(self):
        child = HalResource()
        result = HalResource(data={"a": 1}, embedded={"b": child})
        assert result.get_element("a") == 1
        assert result.get_element("b") is child
        with pytest.raises(KeyError):
            result.get_element("c")

    def test_immutable(self):
        result = HalResource(data={"a": 1})
        with pytest.raises(TypeError):
            result.data["a"] = 2  # type: ignore


def test_link_attributes_are_not_compared():
    assert Link(rel="self", href="/a", attributes={"title": "A"}) == Link(rel="self", href="/a")
    assert Link(rel="self", href="/a").with_rel("item") == Link(rel="item", href="/a")


class TestHalResourceBuilder:
    def test_build(self):
        builder = HalResourceBuilder()
        builder.add_data("title", "Dune")
        builder.add_link(Link(rel="self", href="/book/1"))
        author = HalResource(data={"name": "Frank Herbert"})
        builder.embed("author", author)
        result = builder()
        assert result["title"] == "Dune"
        assert result.get_link("self").href == "/book/1"
        assert result.embedded["author"] is author

    def test_embed_twice_makes_sequence(self):
        builder = HalResourceBuilder()
        a, b, c = HalResource(), HalResource(), HalResource()
        builder.embed("item", a)
        builder.embed("item", b)
        builder.embed("item", c)
        assert builder().embedded["item"] == (a, b, c)

    def test_embed_sequence(self):
        builder = HalResourceBuilder()
        builder.embed("item", [])
        assert builder().embedded["item"] == ()
        with pytest.raises(ValueError):
            builder.embed("item", [HalResource()])
