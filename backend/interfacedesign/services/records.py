"""Base class for normalized catalog records."""
from dataclasses import dataclass, fields
from typing import Any, Dict

from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class CatalogRecord:
    """A normalized, read-only catalog entity.

    Field names are snake_case in Python; :meth:`to_dict` emits the
    camelCase keys of the JSON document model.
    """

    def to_dict(self) -> Dict[str, Any]:
        return {to_camel(f.name): getattr(self, f.name) for f in fields(self)}
