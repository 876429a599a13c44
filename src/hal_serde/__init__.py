from .exceptions import (  # noqa: F401
    ExtractionError,
    HALSerdeException,
    InvalidDeclarationError,
    InvalidPaginationError,
    LinkGenerationError,
    MetadataNotFoundError,
    UnexpectedMetadataTypeError,
    UnknownObjectTypeError,
)
from .extractors import (  # noqa: F401
    CallableExtractor,
    DataclassExtractor,
    ExtractorRegistry,
    ObjectPropertyExtractor,
)
from .generator import ResourceGenerator  # noqa: F401
from .interfaces import (  # noqa: F401
    Extractor,
    PaginatedCollection,
    RequestContext,
    Strategy,
    UrlGenerator,
)
from .links import LinkGenerator, TemplateUrlGenerator  # noqa: F401
from .metadata import (  # noqa: F401
    Metadata,
    MetadataMap,
    PaginationPlacement,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
from .models import HalResource, Link  # noqa: F401
from .pagination import Page  # noqa: F401
