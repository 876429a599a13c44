import pytest

from ..exceptions import ExtractionError
from ..extractors import (
    CallableExtractor,
    DataclassExtractor,
    ExtractorRegistry,
    ObjectPropertyExtractor,
)
from .testing import Author, Book


class Plain:
    def __init__(self):
        self.id = 1
        self.name = "plain"
        self._secret = "x"


class TestObjectPropertyExtractor:
    def test_public_attributes(self):
        assert dict(ObjectPropertyExtractor().extract(Plain())) == {"id": 1, "name": "plain"}

    def test_no_attributes(self):
        with pytest.raises(ExtractionError):
            ObjectPropertyExtractor().extract(1)


class TestDataclassExtractor:
    def test_shallow(self):
        author = Author(id=1, name="Frank Herbert")
        result = DataclassExtractor().extract(Book(id=42, title="Dune", author=author))
        assert list(result) == ["id", "title", "author"]
        assert result["author"] is author

    @pytest.mark.parametrize("value", [Plain(), Book, None])
    def test_not_a_dataclass_instance(self, value):
        with pytest.raises(ExtractionError):
            DataclassExtractor().extract(value)


class TestExtractorRegistry:
    def test_builtins(self):
        target = ExtractorRegistry()
        assert "object_property" in target
        assert "dataclass" in target
        assert isinstance(target.get("dataclass"), DataclassExtractor)

    def test_callable(self):
        target = ExtractorRegistry({"name_only": lambda o: {"name": o.name}})
        extractor = target.get("name_only")
        assert isinstance(extractor, CallableExtractor)
        assert extractor.extract(Plain()) == {"name": "plain"}

    def test_replace(self):
        target = ExtractorRegistry()
        custom = ObjectPropertyExtractor()
        target.add("dataclass", custom)
        assert target.get("dataclass") is custom

    def test_missing(self):
        with pytest.raises(ExtractionError) as e:
            ExtractorRegistry().get("nope")
        assert "nope" in e.value.message

    def test_invalid(self):
        with pytest.raises(TypeError):
            ExtractorRegistry().add("x", 1)  # type: ignore
