# domain/fields.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from domain.exceptions import InvalidPipeline

_PATH_KEYS = ("path", "selector")
_ATTR_KEYS = ("attr", "attribute")


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    selector: str
    attribute: Optional[str] = None

    @property
    def kind(self) -> str:
        return "text" if self.attribute is None else "attribute"


def resolve_fields(fields: Any) -> Tuple[FieldDescriptor, ...]:
    """
    Normalize a select() argument into FieldDescriptors.

    Accepted values per field name:
      - "css > path"                      -> text content
      - {"path": "css", "attr": "href"}   -> attribute value
    ("selector"/"attribute" are accepted as aliases of "path"/"attr")

    Key order of the mapping is preserved. An empty mapping gives ().
    """
    if not isinstance(fields, Mapping):
        raise InvalidPipeline()

    out = []
    for name, definition in fields.items():
        if isinstance(definition, str):
            out.append(FieldDescriptor(name=str(name), selector=definition))
            continue

        if not isinstance(definition, Mapping):
            raise InvalidPipeline()

        selector = _first(definition, _PATH_KEYS)
        if not isinstance(selector, str) or not selector:
            raise InvalidPipeline()

        attribute = _first(definition, _ATTR_KEYS)
        if attribute is not None and not isinstance(attribute, str):
            raise InvalidPipeline()

        out.append(FieldDescriptor(name=str(name), selector=selector, attribute=attribute or None))

    return tuple(out)


def _first(definition: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for k in keys:
        if k in definition:
            return definition[k]
    return None
