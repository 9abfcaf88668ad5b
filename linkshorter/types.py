from datetime import datetime
from uuid import UUID
from collections.abc import Callable
from typing import TypeAlias


# Opaque owner identifier (no authentication behind it)
OwnerId = UUID | str

# Source of "now" for lifecycle decisions (timezone-aware UTC)
Clock: TypeAlias = Callable[[], datetime]
