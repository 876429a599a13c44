from .formatting import english_enumerate  # noqa
from .typing import assert_not_none  # noqa
