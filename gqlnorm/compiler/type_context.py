"""Read-only view of a GraphQL schema used by the passes.

Built once per compile from a graphql-core ``GraphQLSchema``. The schema is
never mutated, so one instance can be shared by concurrent compiles.
"""

from __future__ import annotations

from collections.abc import Iterable

from graphql import (
    GraphQLNamedType,
    GraphQLSchema,
    SchemaMetaFieldDef,
    TypeMetaFieldDef,
    build_schema,
    get_named_type,
    is_abstract_type,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_leaf_type,
    is_object_type,
    is_required_argument,
    is_union_type,
)

from gqlnorm.compiler.types import TYPENAME, DocumentKind, TypeKind


class TypeContext:
    """Resolve what a selection targets against the schema."""

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema
        self._roots: dict[DocumentKind, GraphQLNamedType | None] = {
            DocumentKind.QUERY: schema.query_type,
            DocumentKind.MUTATION: schema.mutation_type,
            DocumentKind.SUBSCRIPTION: schema.subscription_type,
        }

    @classmethod
    def from_sdl(cls, sdl: str) -> TypeContext:
        return cls(build_schema(sdl))

    def get_type(self, name: str) -> GraphQLNamedType | None:
        return self.schema.get_type(name)

    def root_type(self, kind: DocumentKind) -> GraphQLNamedType | None:
        """Return the root object type for an operation kind."""
        return self._roots.get(kind)

    def is_root_type(self, type_: GraphQLNamedType) -> bool:
        return any(root is type_ for root in self._roots.values())

    def kind_of(self, type_: GraphQLNamedType) -> TypeKind:
        if is_object_type(type_):
            return TypeKind.OBJECT
        if is_interface_type(type_):
            return TypeKind.INTERFACE
        if is_union_type(type_):
            return TypeKind.UNION
        if is_enum_type(type_):
            return TypeKind.ENUM
        if is_input_object_type(type_):
            return TypeKind.INPUT
        return TypeKind.SCALAR

    def is_abstract(self, type_: GraphQLNamedType) -> bool:
        """Interfaces and unions: the concrete type is only known at runtime."""
        return is_abstract_type(type_)

    def is_composite(self, type_: GraphQLNamedType) -> bool:
        return self.kind_of(type_) in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)

    def field_type(self, parent: GraphQLNamedType, field_name: str) -> GraphQLNamedType | None:
        """Return the unwrapped return type of ``parent.field_name``.

        Returns None when the field does not exist on the parent.
        """
        if field_name == TYPENAME and self.is_composite(parent):
            return self.schema.get_type("String")
        if parent is self.schema.query_type:
            if field_name == "__schema":
                return get_named_type(SchemaMetaFieldDef.type)
            if field_name == "__type":
                return get_named_type(TypeMetaFieldDef.type)

        if not (is_object_type(parent) or is_interface_type(parent)):
            return None
        field = parent.fields.get(field_name)  # type: ignore[union-attr]
        if field is None:
            return None
        return get_named_type(field.type)

    def possible_types(self, type_: GraphQLNamedType) -> list[str]:
        """Names of the object types a value of ``type_`` can be at runtime."""
        if is_abstract_type(type_):
            return [t.name for t in self.schema.get_possible_types(type_)]  # type: ignore[arg-type]
        if is_object_type(type_):
            return [type_.name]
        return []

    def has_fields(self, type_: GraphQLNamedType, names: Iterable[str]) -> bool:
        if not (is_object_type(type_) or is_interface_type(type_)):
            return False
        fields = type_.fields  # type: ignore[union-attr]
        return all(name in fields for name in names)

    def is_bare_selectable(self, type_: GraphQLNamedType, field_name: str) -> bool:
        """Whether ``type_.field_name`` can be selected with no arguments and no sub-selection."""
        if not (is_object_type(type_) or is_interface_type(type_)):
            return False
        field = type_.fields.get(field_name)  # type: ignore[union-attr]
        if field is None or not is_leaf_type(get_named_type(field.type)):
            return False
        return not any(is_required_argument(arg) for arg in field.args.values())
