from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple

FieldType = Literal["int", "number", "str", "date", "bool"]

@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: FieldType

@dataclass(frozen=True)
class EntitySchema:
    entity: str
    fields: Tuple[FieldSpec, ...]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def by_name(self) -> Dict[str, FieldSpec]:
        return {f.name: f for f in self.fields}

    def type_of(self, name: str) -> Optional[FieldType]:
        spec = self.by_name.get(name)
        return spec.type if spec else None
