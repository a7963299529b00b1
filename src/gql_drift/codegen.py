"""Emit a Python module holding the static registry of one type."""

import json
from pathlib import Path

from caseconverter import macrocase, snakecase

from gql_drift import log
from gql_drift.core.naming import default_query_name, get_input_type_name
from gql_drift.core.types import FieldDefinition, MutationInfo, ResolvedType

HEADER = """\
# AUTO-GENERATED by gql-drift - do not edit manually
# Source type: {type_name}
# Regenerate: gql-drift generate
"""


def _literal(value: str) -> str:
    return json.dumps(value)


def render_field(field: FieldDefinition) -> str:
    parts = [
        f"key={_literal(field.key)}",
        f"label={_literal(field.label)}",
        f"graphql_path={_literal(field.graphql_path)}",
        f"type={_literal(field.type.value)}",
    ]
    if field.enum_values is not None:
        parts.append(f"enum_values=[{', '.join(_literal(value) for value in field.enum_values)}]")
    return f"FieldDefinition({', '.join(parts)})"


def render_field_list(fields: list[FieldDefinition]) -> str:
    if not fields:
        return "[]"
    lines = "".join(f"    {render_field(field)},\n" for field in fields)
    return f"[\n{lines}]"


def render_mutation(info: MutationInfo) -> str:
    return (
        f"MutationInfo(operation={_literal(info.operation.value)}, "
        f"mutation_name={_literal(info.mutation_name)}, "
        f"input_type_name={_literal(info.input_type_name)})"
    )


def mutation_infos(resolved: ResolvedType) -> list[MutationInfo]:
    """List the discovered mutations with their conventional input type names."""
    return [
        MutationInfo(
            operation=operation,
            mutation_name=mutation_name,
            input_type_name=get_input_type_name(resolved.type_name, operation),
        )
        for operation, mutation_name in resolved.mutations.items()
    ]


def module_name(type_name: str) -> str:
    return str(snakecase(type_name))


def render_module(resolved: ResolvedType) -> str:
    """Render the generated module source for a resolved type.

    Args:
        resolved: The resolved type to serialize

    Returns:
        Python source defining ``<TYPE>_FIELDS``, ``<TYPE>_MUTATIONS``,
        ``<type>_type`` and ``<TYPE>_QUERY``
    """
    const = str(macrocase(resolved.type_name))
    var = module_name(resolved.type_name)
    infos = mutation_infos(resolved)

    sections = [
        HEADER.format(type_name=resolved.type_name),
        "from gql_drift import FieldDefinition, MutationInfo, build_query, define_drift_type\n",
        f"{const}_FIELDS = {render_field_list(resolved.fields)}\n",
    ]
    if resolved.input_fields:
        sections.append(f"{const}_INPUT_FIELDS = {render_field_list(resolved.input_fields)}\n")
        sections.append(f"{const}_EDITABLE_FIELDS = {render_field_list(resolved.editable_fields or [])}\n")

    mutations = "".join(f"    {render_mutation(info)},\n" for info in infos)
    sections.append(f"{const}_MUTATIONS = [\n{mutations}]\n" if infos else f"{const}_MUTATIONS = []\n")

    input_args = (
        f"    input_fields={const}_INPUT_FIELDS,\n    editable_fields={const}_EDITABLE_FIELDS,\n"
        if resolved.input_fields
        else "    input_fields=[],\n"
    )
    sections.append(
        f"{var}_type = define_drift_type(\n"
        f"    type_name={_literal(resolved.type_name)},\n"
        f"    fields={const}_FIELDS,\n"
        f"    mutations={const}_MUTATIONS,\n"
        f"{input_args}"
        ")\n"
    )
    sections.append(f"{const}_QUERY = build_query({_literal(default_query_name(resolved.type_name))}, {const}_FIELDS)\n")

    return "\n\n".join(section.rstrip("\n") for section in sections) + "\n"


def write_module(resolved: ResolvedType, out_dir: Path) -> Path:
    """Write the generated module for a type into ``out_dir`` and return its path."""
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{module_name(resolved.type_name)}.py"
    with open(path, "w", encoding="utf-8") as output_file:
        log.debug(f"Writing registry module to '{path}'")
        output_file.write(render_module(resolved))
    return path
