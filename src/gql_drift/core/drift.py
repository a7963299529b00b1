import asyncio
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass, field
from typing import Any

from gql_drift import log
from gql_drift.core.flatten import flatten, unflatten
from gql_drift.core.introspection import discover_mutations
from gql_drift.core.mutation_builder import build_create_mutation, build_update_mutation
from gql_drift.core.query_builder import build_query
from gql_drift.core.registry import build_input_registry, build_registry_async
from gql_drift.core.transport import gql_fetch
from gql_drift.core.types import DriftConfig, FieldDefinition, MutationInfo, ResolvedType
from gql_drift.errors import InputTypeNotFoundError, SchemaLookupError

TypeResolver = Callable[[str], Coroutine[Any, Any, ResolvedType]]


class TypeCache:
    """Caller-owned cache of resolved types keyed by type name.

    Concurrent lookups of one name share a single in-flight task, and a
    cancelled caller leaves it running for the others. A successful
    result is kept for the lifetime of the cache; a failure is dropped so the
    next lookup retries.
    """

    def __init__(self) -> None:
        self._resolved: dict[str, ResolvedType] = {}
        self._pending: dict[str, asyncio.Task[ResolvedType]] = {}

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._resolved

    def __len__(self) -> int:
        return len(self._resolved)

    def get(self, type_name: str) -> ResolvedType | None:
        return self._resolved.get(type_name)

    def put(self, resolved: ResolvedType) -> None:
        self._resolved[resolved.type_name] = resolved

    def clear(self) -> None:
        self._resolved.clear()

    async def get_or_resolve(self, type_name: str, resolver: TypeResolver) -> ResolvedType:
        """Return the cached type, joining or starting its resolution when missing."""
        cached = self._resolved.get(type_name)
        if cached is not None:
            log.debug(f"Type cache hit for '{type_name}'")
            return cached

        task = self._pending.get(type_name)
        if task is None:
            task = asyncio.ensure_future(resolver(type_name))
            self._pending[type_name] = task
            task.add_done_callback(lambda done: self._settle(type_name, done))
        return await asyncio.shield(task)

    def _settle(self, type_name: str, task: "asyncio.Task[ResolvedType]") -> None:
        if self._pending.get(type_name) is task:
            del self._pending[type_name]
        if not task.cancelled() and task.exception() is None:
            self._resolved[type_name] = task.result()


async def resolve_type(type_name: str, config: DriftConfig) -> ResolvedType:
    """Introspect a type and resolve its fields, mutations and editable fields.

    A missing ``Update{TypeName}Input`` means the type is read-only and yields
    empty input and editable fields. Any other failure propagates.
    """
    fields = await build_registry_async(type_name, config)
    mutations = await discover_mutations(type_name, config)

    input_fields: list[FieldDefinition] = []
    try:
        input_fields = await build_input_registry(type_name, config)
    except InputTypeNotFoundError as e:
        log.debug(f"{e} Treating '{type_name}' as read-only.")

    return ResolvedType(type_name=type_name, fields=fields, mutations=mutations, input_fields=input_fields)


def define_drift_type(
    type_name: str,
    fields: list[FieldDefinition],
    mutations: list[MutationInfo] | None = None,
    input_fields: list[FieldDefinition] | None = None,
    editable_fields: list[FieldDefinition] | None = None,
) -> ResolvedType:
    """Create a resolved type from a static (generated) registry.

    Args:
        type_name: The type name, e.g. "Order"
        fields: All field definitions
        mutations: Mutation metadata recorded at generation time
        input_fields: Writable fields; every field is assumed writable when omitted
        editable_fields: Explicit editable fields; derived from fields and input fields when omitted

    Returns:
        The resolved type
    """
    return ResolvedType(
        type_name=type_name,
        fields=fields,
        mutations={info.operation: info.mutation_name for info in mutations or []},
        input_fields=fields if input_fields is None else input_fields,
        editable_fields=editable_fields,
    )


@dataclass
class FetchResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    raw: Any = None


class DriftClient:
    """Binds a config and a type resolver to the query, mutation and flatten helpers."""

    build_query = staticmethod(build_query)
    build_update_mutation = staticmethod(build_update_mutation)
    build_create_mutation = staticmethod(build_create_mutation)
    flatten = staticmethod(flatten)
    unflatten = staticmethod(unflatten)
    query = staticmethod(build_query)

    def __init__(self, config: DriftConfig, resolver: TypeResolver) -> None:
        self.config = config
        self._resolver = resolver

    async def get_type(self, type_name: str) -> ResolvedType:
        return await self._resolver(type_name)

    async def fetch(
        self,
        query_name: str,
        drift_type: ResolvedType,
        fields: list[FieldDefinition] | None = None,
        filter_type_name: str | None = None,
        extra_variables: str | None = None,
        variables: dict[str, Any] | None = None,
    ) -> FetchResult:
        """Run a list query and return flattened rows along with the raw data."""
        selected = drift_type.fields if fields is None else fields
        document = build_query(query_name, selected, filter_type_name, extra_variables)
        data = await gql_fetch(self.config, document, variables)

        items = data.get(query_name) if isinstance(data, Mapping) else None
        rows = [flatten(item, selected) for item in items] if isinstance(items, list) else []
        return FetchResult(rows=rows, raw=data)

    async def update(
        self,
        drift_type: ResolvedType,
        row_id: str,
        values: Mapping[str, Any],
        return_fields: list[FieldDefinition] | None = None,
    ) -> Any:
        """Send an update with the changed flat values of one row."""
        if not row_id:
            raise ValueError("Update requires an id")
        document = build_update_mutation(
            drift_type.type_name, drift_type.fields if return_fields is None else return_fields
        )
        payload = unflatten(values, drift_type.editable_fields or [])
        return await gql_fetch(self.config, document, {"id": row_id, "input": payload})

    async def create(
        self,
        drift_type: ResolvedType,
        values: Mapping[str, Any],
        return_fields: list[FieldDefinition] | None = None,
    ) -> Any:
        """Send a create with the flat values of a new row."""
        document = build_create_mutation(
            drift_type.type_name, drift_type.fields if return_fields is None else return_fields
        )
        payload = unflatten(values, drift_type.input_fields)
        return await gql_fetch(self.config, document, {"input": payload})


def create_drift(config: DriftConfig, cache: TypeCache | None = None) -> DriftClient:
    """Create a client that resolves types through runtime introspection.

    Resolved types are kept in ``cache``; pass one in to share it between clients.
    """
    type_cache = TypeCache() if cache is None else cache

    async def resolver(type_name: str) -> ResolvedType:
        return await type_cache.get_or_resolve(type_name, lambda name: resolve_type(name, config))

    return DriftClient(config, resolver)


def create_drift_from_registry(config: DriftConfig, *registries: ResolvedType) -> DriftClient:
    """Create a client over pre-built registries. No introspection is performed."""
    types = {registry.type_name: registry for registry in registries}

    async def resolver(type_name: str) -> ResolvedType:
        if type_name not in types:
            raise SchemaLookupError(
                type_name,
                f"Type '{type_name}' was not provided in the static registry. "
                f"Available types: {', '.join(types)}",
            )
        return types[type_name]

    return DriftClient(config, resolver)
