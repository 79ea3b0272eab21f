__title__ = 'switchboard'
__author__ = 'Switchboard Contributors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .config import *
from .faults import *
from .help import *
from .kinds import *
from .logger import *
from .names import *
from .processor import *
from .registry import *
from .switches import *
from .utils import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the switch definitions
__all__ += switches.__all__  # type: ignore[attr-defined]
__all__ += names.__all__  # type: ignore[attr-defined]
__all__ += kinds.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the processor
__all__ += processor.__all__  # type: ignore[attr-defined]
__all__ += config.__all__  # type: ignore[attr-defined]
__all__ += help.__all__  # type: ignore[attr-defined]
__all__ += logger.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the utilities
__all__ += utils.__all__  # type: ignore[attr-defined]
