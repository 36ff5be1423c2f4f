__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'voidable'
__license__ = 'MIT'
__version__ = "0.1.0"

from .maybe import *
from .serialization import *
from .faults import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the maybe type
__all__ += maybe.__all__  # type: ignore[attr-defined]
# Load the exposed API of the pydantic integration
__all__ += serialization.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]

# The GraphQL adapter (voidable.inputs) needs the `graphql` extra and is imported explicitly.
