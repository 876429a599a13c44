import abc
import typing

from .utils import english_enumerate


class HALSerdeException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(HALSerdeException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class MetadataNotFoundError(HALSerdeException):
    class_: typing.Type

    @property
    def message(self) -> str:
        return f"no metadata registered for {self.class_.__module__}.{self.class_.__qualname__} or any of its ancestors"

    def __init__(self, class_: typing.Type):
        super().__init__(class_)
        self.class_ = class_


class UnknownObjectTypeError(HALSerdeException):
    """
    Raised by :py:meth:`ResourceGenerator.from_object` when the given instance
    cannot be mapped to any metadata.  The original :py:class:`MetadataNotFoundError`
    is available as ``__cause__``.
    """

    class_: typing.Type

    @property
    def message(self) -> str:
        return f"cannot generate a resource for an object of type {self.class_.__module__}.{self.class_.__qualname__}"

    def __init__(self, class_: typing.Type):
        super().__init__(class_)
        self.class_ = class_


class UnexpectedMetadataTypeError(HALSerdeException):
    metadata: "metadata_.Metadata"
    expected: typing.Sequence[typing.Type]

    @property
    def message(self) -> str:
        actual = type(self.metadata).__name__
        if not self.expected:
            discriminator = getattr(self.metadata, "discriminator", None)
            if discriminator is None:
                return f"no strategy registered for metadata of type {actual} (no discriminator)"
            return f"no strategy registered for metadata of type {actual} ({discriminator})"
        return (
            f"unexpected metadata of type {actual}; "
            f"expected {english_enumerate((e.__name__ for e in self.expected), conj=', or ')}"
        )

    def __init__(
        self,
        metadata: "metadata_.Metadata",
        expected: typing.Sequence[typing.Type] = (),
    ):
        super().__init__(metadata)
        self.metadata = metadata
        self.expected = expected


class ExtractionError(HALSerdeException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class LinkGenerationError(HALSerdeException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class InvalidPaginationError(HALSerdeException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


if typing.TYPE_CHECKING:
    from . import metadata as metadata_  # noqa: E402
