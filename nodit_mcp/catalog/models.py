"""Typed views over parsed Nodit specification documents."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

HTTP_METHODS: Tuple[str, ...] = ("get", "post", "put", "patch", "delete")


class ApiFamily(str, Enum):
    NODE = "node"
    DATA = "data"
    WEBHOOK = "webhook"
    GRAPHQL_TABLE = "graphql_table"


class SpecFormatError(ValueError):
    """Raised when a parsed document does not have the expected shape."""


@dataclass(frozen=True, slots=True)
class Parameter:
    name: str
    location: Optional[str] = None
    type: Optional[str] = None
    enum: Optional[Tuple[str, ...]] = None
    required: bool = False

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["Parameter"]:
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            return None
        schema = raw.get("schema") if isinstance(raw.get("schema"), dict) else {}
        raw_enum = schema.get("enum")
        enum = tuple(str(value) for value in raw_enum) if isinstance(raw_enum, list) else None
        return cls(
            name=raw["name"],
            location=raw.get("in"),
            type=schema.get("type"),
            enum=enum,
            required=bool(raw.get("required", False)),
        )


@dataclass(frozen=True, slots=True)
class Operation:
    """One HTTP method at one path of a specification document."""

    operation_id: str
    method: str
    path: str
    description: Optional[str] = None
    parameters: Tuple[Parameter, ...] = ()
    request_body: Any = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, path: str, method: str, raw: Mapping[str, Any]) -> "Operation":
        raw_parameters = raw.get("parameters") or []
        if not isinstance(raw_parameters, list):
            raise SpecFormatError(f"{method.upper()} {path}: 'parameters' is not a list")
        parameters = tuple(
            param
            for param in (Parameter.from_raw(item) for item in raw_parameters)
            if param is not None
        )
        description = raw.get("description")
        return cls(
            operation_id=raw["operationId"],
            method=method,
            path=path,
            description=description if isinstance(description, str) else None,
            parameters=parameters,
            request_body=copy.deepcopy(raw.get("requestBody")),
            raw=MappingProxyType(copy.deepcopy(dict(raw))),
        )

    def parameter(self, name: str) -> Optional[Parameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def enum_values(self, name: str) -> List[str]:
        param = self.parameter(name)
        if param is None or param.enum is None:
            return []
        return list(param.enum)

    def to_dict(self) -> Dict[str, Any]:
        """Return a mutable deep copy of the declared operation."""
        return copy.deepcopy(dict(self.raw))


@dataclass(frozen=True, slots=True)
class SpecDocument:
    """
    One parsed OpenAPI document.

    ``paths`` maps a path template to ``{method: Operation}``. Documents are
    immutable once built; single-operation views share the parent's server URL.
    """

    name: str
    server_url: Optional[str]
    paths: Mapping[str, Mapping[str, Operation]]
    title: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def from_openapi(cls, name: str, raw: Any) -> "SpecDocument":
        if not isinstance(raw, dict):
            raise SpecFormatError(f"{name}: document root is not a mapping")
        raw_paths = raw.get("paths")
        if not isinstance(raw_paths, dict):
            raise SpecFormatError(f"{name}: missing 'paths'")

        paths: Dict[str, Mapping[str, Operation]] = {}
        for path, path_item in raw_paths.items():
            if not isinstance(path_item, dict):
                continue
            methods: Dict[str, Operation] = {}
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if isinstance(operation, dict) and isinstance(operation.get("operationId"), str):
                    methods[method] = Operation.from_raw(path, method, operation)
            if methods:
                paths[path] = MappingProxyType(methods)

        server_url = None
        servers = raw.get("servers")
        if isinstance(servers, list) and servers and isinstance(servers[0], dict):
            url = servers[0].get("url")
            if isinstance(url, str) and url:
                server_url = url

        info = raw.get("info") if isinstance(raw.get("info"), dict) else {}
        return cls(
            name=name,
            server_url=server_url,
            paths=MappingProxyType(paths),
            title=info.get("title"),
            version=str(info["version"]) if "version" in info else None,
        )

    def operations(self) -> Iterator[Operation]:
        for methods in self.paths.values():
            yield from methods.values()

    def single_operation_view(self, operation: Operation) -> "SpecDocument":
        return SpecDocument(
            name=f"{self.name}#{operation.operation_id}",
            server_url=self.server_url,
            paths=MappingProxyType(
                {operation.path: MappingProxyType({operation.method: operation})}
            ),
            title=self.title,
            version=self.version,
        )


@dataclass(frozen=True, slots=True)
class ResolvedApiSpec:
    base_url: str
    path_template: str
    method: str
    operation: Operation


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def _sequence(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


@dataclass(frozen=True, slots=True)
class Relationship:
    name: str
    remote_table: str
    column_mapping: Mapping[str, Any]

    @classmethod
    def from_raw(cls, raw: Any) -> "Relationship":
        if not isinstance(raw, dict):
            return cls(name="unknown", remote_table="unknown", column_mapping={})
        manual = _mapping(_mapping(raw.get("using")).get("manual_configuration"))
        remote_table = _mapping(manual.get("remote_table")).get("name")
        name = raw.get("name")
        return cls(
            name=name if isinstance(name, str) and name else "unknown",
            remote_table=remote_table if isinstance(remote_table, str) and remote_table else "unknown",
            column_mapping=copy.deepcopy(_mapping(manual.get("column_mapping"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "remote_table": self.remote_table,
            "column_mapping": copy.deepcopy(dict(self.column_mapping)),
        }


@dataclass(frozen=True, slots=True)
class GraphQLTable:
    """An Aptos indexer query root backed by one table."""

    name: str
    table: Optional[str]
    columns: Tuple[str, ...] = ()
    object_relationships: Tuple[Relationship, ...] = ()
    array_relationships: Tuple[Relationship, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Optional["GraphQLTable"]:
        custom_name = _mapping(raw.get("configuration")).get("custom_name")
        if not isinstance(custom_name, str) or not custom_name:
            return None

        columns: Tuple[str, ...] = ()
        permissions = _sequence(raw.get("select_permissions"))
        if permissions and isinstance(permissions[0], dict):
            raw_columns = _sequence(_mapping(permissions[0].get("permission")).get("columns"))
            columns = tuple(str(column) for column in raw_columns)

        table = raw.get("table")
        if isinstance(table, dict):
            # Hasura metadata may carry {"schema": ..., "name": ...}
            table = table.get("name")
        return cls(
            name=custom_name,
            table=table if isinstance(table, str) else None,
            columns=columns,
            object_relationships=tuple(
                Relationship.from_raw(rel) for rel in _sequence(raw.get("object_relationships"))
            ),
            array_relationships=tuple(
                Relationship.from_raw(rel) for rel in _sequence(raw.get("array_relationships"))
            ),
        )

    def to_spec(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "table": self.table,
            "columns": list(self.columns),
            "relationships": {
                "object": [rel.to_dict() for rel in self.object_relationships],
                "array": [rel.to_dict() for rel in self.array_relationships],
            },
        }
