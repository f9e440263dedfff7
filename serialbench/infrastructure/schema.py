"""
Schema provider for the Protocol Buffers codec.

Schemas are declared as tables of field definitions and compiled at load time into a
`FileDescriptorProto`, registered in a private descriptor pool, and turned into
concrete message classes with `message_factory.GetMessageClass`. The returned
`SchemaDescriptor` offers the three operations the codec layer relies on:
structural validation, deterministic encoding, and decoding back to plain dicts.

Usage:
    from serialbench.infrastructure.schema import load_schema

    schema = load_schema("Employees")
    result = schema.validate({"employee": [...]})
    if result.ok:
        data = schema.encode({"employee": [...]})
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, Message

from serialbench.utils.logging import get_logger

log = get_logger(__name__)

PACKAGE = "serialbench"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_SCALAR_TYPES = {
    "int32": descriptor_pb2.FieldDescriptorProto.TYPE_INT32,
    "float": descriptor_pb2.FieldDescriptorProto.TYPE_FLOAT,
    "string": descriptor_pb2.FieldDescriptorProto.TYPE_STRING,
    "bool": descriptor_pb2.FieldDescriptorProto.TYPE_BOOL,
}


class SchemaViolation(ValueError):
    """Raised when an object does not match the shape required by a schema."""


@dataclass(frozen=True)
class FieldDef:
    """One declared field: name, wire number, scalar or message type."""

    name: str
    number: int
    type: str
    repeated: bool = False

    @property
    def is_message(self) -> bool:
        return self.type not in _SCALAR_TYPES


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a schema check; `error` is None when the object conforms."""

    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(ok=False, error=error)


# Schema registry: root message name -> ordered message declarations.
_SCHEMAS: Dict[str, Dict[str, Tuple[FieldDef, ...]]] = {
    "Employees": {
        "Employee": (
            FieldDef("id", 1, "int32"),
            FieldDef("name", 2, "string"),
            FieldDef("salary", 3, "float"),
            FieldDef("email", 4, "string"),
            FieldDef("hire_date", 5, "string"),
            FieldDef("skills", 6, "string", repeated=True),
            FieldDef("is_active", 7, "bool"),
        ),
        "Employees": (FieldDef("employee", 1, "Employee", repeated=True),),
    },
}


def available_schemas() -> List[str]:
    """List registered schema names."""
    return sorted(_SCHEMAS.keys())


def _build_file_proto(
    root: str, messages: Mapping[str, Tuple[FieldDef, ...]]
) -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"{root.lower()}.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, field_defs in messages.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for field_def in field_defs:
            field_proto = message_proto.field.add(
                name=field_def.name,
                number=field_def.number,
                label=(
                    descriptor_pb2.FieldDescriptorProto.LABEL_REPEATED
                    if field_def.repeated
                    else descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL
                ),
            )
            if field_def.is_message:
                field_proto.type = descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE
                field_proto.type_name = f".{PACKAGE}.{field_def.type}"
            else:
                field_proto.type = _SCALAR_TYPES[field_def.type]
    return file_proto


class SchemaDescriptor:
    """
    Structural type descriptor for one root message.

    Attributes
    ----------
    name : str
        Root message name (e.g. "Employees").
    message_class : type
        Generated protobuf message class for the root message.
    """

    def __init__(self, name: str, messages: Mapping[str, Tuple[FieldDef, ...]]) -> None:
        if name not in messages:
            raise KeyError(f"Root message '{name}' is not declared in its schema")
        self.name = name
        self._messages = dict(messages)
        self._pool = descriptor_pool.DescriptorPool()
        self._pool.AddSerializedFile(_build_file_proto(name, messages).SerializeToString())
        self.message_class = self._message_class(name)

    def _message_class(self, message_name: str) -> type:
        descriptor = self._pool.FindMessageTypeByName(f"{PACKAGE}.{message_name}")
        return message_factory.GetMessageClass(descriptor)

    def fields(self, message_name: Optional[str] = None) -> Tuple[FieldDef, ...]:
        return self._messages[message_name or self.name]

    def field_names(self, message_name: Optional[str] = None) -> List[str]:
        return [field_def.name for field_def in self.fields(message_name)]

    # -- validation --------------------------------------------------------

    def verify(self, obj: Any) -> Optional[str]:
        """
        Check that a plain object matches the declared shape.

        Returns a descriptive error for the first mismatch, or None. Fields
        missing from the object are allowed (proto3 defaults apply) and keys
        that the schema does not declare are ignored.
        """
        return self._verify_message(obj, self.name, "")

    def validate(self, obj: Any) -> ValidationResult:
        error = self.verify(obj)
        return ValidationResult.failure(error) if error else ValidationResult.success()

    def _verify_message(self, obj: Any, message_name: str, path: str) -> Optional[str]:
        if not isinstance(obj, Mapping):
            return f"{path or message_name}: object expected"
        for field_def in self._messages[message_name]:
            value = obj.get(field_def.name)
            if value is None:
                continue
            where = f"{path}.{field_def.name}" if path else field_def.name
            if field_def.repeated:
                if not isinstance(value, (list, tuple)):
                    return f"{where}: array expected"
                for index, item in enumerate(value):
                    error = self._verify_value(item, field_def, f"{where}[{index}]")
                    if error:
                        return error
            else:
                error = self._verify_value(value, field_def, where)
                if error:
                    return error
        return None

    def _verify_value(self, value: Any, field_def: FieldDef, where: str) -> Optional[str]:
        if field_def.is_message:
            return self._verify_message(value, field_def.type, where)
        if field_def.type == "int32":
            if isinstance(value, bool) or not isinstance(value, int):
                return f"{where}: integer expected"
            if not INT32_MIN <= value <= INT32_MAX:
                return f"{where}: integer out of int32 range"
        elif field_def.type == "float":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"{where}: number expected"
        elif field_def.type == "string":
            if not isinstance(value, str):
                return f"{where}: string expected"
        elif field_def.type == "bool":
            if not isinstance(value, bool):
                return f"{where}: boolean expected"
        return None

    # -- encoding ----------------------------------------------------------

    def create(self, obj: Mapping[str, Any]) -> Message:
        """
        Build a root message from a plain object.

        Raises
        ------
        SchemaViolation
            If the protobuf runtime rejects a value.
        """
        message = self.message_class()
        try:
            self._fill(message, obj, self.name)
        except (TypeError, ValueError, AttributeError) as exc:
            raise SchemaViolation(f"{self.name}: {exc}") from exc
        return message

    def _fill(self, message: Message, obj: Mapping[str, Any], message_name: str) -> None:
        for field_def in self._messages[message_name]:
            value = obj.get(field_def.name)
            if value is None:
                continue
            target = getattr(message, field_def.name)
            if field_def.is_message and field_def.repeated:
                for item in value:
                    self._fill(target.add(), item, field_def.type)
            elif field_def.is_message:
                self._fill(target, value, field_def.type)
            elif field_def.repeated:
                target.extend(value)
            else:
                setattr(message, field_def.name, value)

    def encode(self, obj: Mapping[str, Any]) -> bytes:
        return self.create(obj).SerializeToString(deterministic=True)

    # -- decoding ----------------------------------------------------------

    def decode(self, data: bytes) -> Dict[str, Any]:
        """
        Parse bytes into a plain dict, emitting every declared field.

        Scalars come back in their schema type (`salary` as float), and
        defaults such as `is_active=False` are kept.
        """
        message = self.message_class()
        try:
            message.ParseFromString(data)
        except DecodeError:
            log.error("Failed to decode payload", extra={"schema": self.name, "size": len(data)})
            raise
        return self.to_dict(message)

    def to_dict(self, message: Message, message_name: Optional[str] = None) -> Dict[str, Any]:
        message_name = message_name or self.name
        out: Dict[str, Any] = {}
        for field_def in self._messages[message_name]:
            value = getattr(message, field_def.name)
            if field_def.is_message and field_def.repeated:
                out[field_def.name] = [self.to_dict(item, field_def.type) for item in value]
            elif field_def.is_message:
                out[field_def.name] = self.to_dict(value, field_def.type)
            elif field_def.repeated:
                out[field_def.name] = list(value)
            else:
                out[field_def.name] = value
        return out

    def __repr__(self) -> str:
        return f"SchemaDescriptor(name={self.name!r}, messages={sorted(self._messages)!r})"


@lru_cache(maxsize=None)
def load_schema(name: str = "Employees") -> SchemaDescriptor:
    """
    Load a schema descriptor by its root message name.

    Raises
    ------
    KeyError
        If no schema with that name is registered.
    """
    if name not in _SCHEMAS:
        raise KeyError(f"Unknown schema '{name}'. Available: {', '.join(available_schemas())}")
    descriptor = SchemaDescriptor(name, _SCHEMAS[name])
    log.debug("Schema loaded", extra={"schema": name, "messages": len(_SCHEMAS[name])})
    return descriptor


__all__ = [
    "FieldDef",
    "SchemaDescriptor",
    "SchemaViolation",
    "ValidationResult",
    "available_schemas",
    "load_schema",
]
