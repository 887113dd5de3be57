from typing import Any


# Type aliases for Python dictionaries
type AppConfiguration = dict[str, Any]
