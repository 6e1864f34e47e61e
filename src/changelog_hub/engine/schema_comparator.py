"""
Comparison of schema-graph types (GraphQL types, Protobuf messages and enums).
"""

from changelog_hub.engine import rules
from changelog_hub.models.change import Change, ChangeCategory, ChangeType
from changelog_hub.models.snapshot import SchemaField, SchemaType


def _index_fields(fields: list[SchemaField]) -> dict[str, SchemaField]:
    indexed: dict[str, SchemaField] = {}
    for field in fields:
        indexed.setdefault(field.name, field)
    return indexed


def _removed_and_added(old: list[str], new: list[str]) -> tuple[list[str], list[str]]:
    """Order-preserving set difference in both directions."""
    old_set, new_set = set(old), set(new)
    removed = [value for value in dict.fromkeys(old) if value not in new_set]
    added = [value for value in dict.fromkeys(new) if value not in old_set]
    return removed, added


class SchemaComparator:
    """Compare named types that exist in both snapshots."""

    def type_added(self, schema_type: SchemaType) -> Change:
        return rules.make_change(
            ChangeType.ADDED,
            ChangeCategory.TYPE,
            rules.type_added(),
            f"types.{schema_type.name}",
            f"Added {schema_type.kind.value} type '{schema_type.name}'",
            new_value=schema_type.kind.value,
            subject=schema_type.name,
        )

    def type_removed(self, schema_type: SchemaType) -> Change:
        return rules.make_change(
            ChangeType.REMOVED,
            ChangeCategory.TYPE,
            rules.type_removed(),
            f"types.{schema_type.name}",
            f"Removed {schema_type.kind.value} type '{schema_type.name}'",
            old_value=schema_type.kind.value,
            subject=schema_type.name,
        )

    def compare(self, old: SchemaType, new: SchemaType) -> list[Change]:
        """
        Compare two versions of a named type.

        A kind change (e.g. object to interface) is reported alone; the
        members of differently-kinded types are not comparable.

        Args:
            old: The type in the old snapshot.
            new: The type in the new snapshot.

        Returns:
            Changes in emission order (unsorted).
        """
        base = f"types.{new.name}"

        if old.kind != new.kind:
            return [rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.TYPE,
                rules.type_kind_changed(),
                f"{base}.kind",
                f"Type '{new.name}' changed from {old.kind.value} to {new.kind.value}",
                old_value=old.kind.value,
                new_value=new.kind.value,
                subject=new.name,
            )]

        changes: list[Change] = []
        changes.extend(self.compare_fields(old, new))
        changes.extend(self.compare_enum_values(old, new))
        changes.extend(self.compare_union_members(old, new))
        changes.extend(self.compare_interfaces(old, new))
        return changes

    def compare_fields(self, old: SchemaType, new: SchemaType) -> list[Change]:
        changes: list[Change] = []
        base = f"types.{new.name}.fields"
        old_fields = _index_fields(old.fields)
        new_fields = _index_fields(new.fields)
        input_type = new.is_input

        for name, field in old_fields.items():
            if name not in new_fields:
                changes.append(rules.make_change(
                    ChangeType.REMOVED,
                    ChangeCategory.FIELD,
                    rules.field_removed(),
                    f"{base}.{name}",
                    f"Removed field '{name}' from {new.name}",
                    old_value=field.type,
                    subject=f"{new.name}.{name}",
                ))

        for name, field in new_fields.items():
            if name not in old_fields:
                has_default = field.default is not None
                changes.append(rules.make_change(
                    ChangeType.ADDED,
                    ChangeCategory.FIELD,
                    rules.field_added(input_type, field.required, has_default),
                    f"{base}.{name}",
                    f"Added field '{name}' to {new.name}",
                    new_value=field.type,
                    subject=f"{new.name}.{name}",
                ))

        for name, new_field in new_fields.items():
            old_field = old_fields.get(name)
            if old_field is not None:
                changes.extend(self._compare_field(old_field, new_field, new, input_type))

        return changes

    def _compare_field(
        self,
        old: SchemaField,
        new: SchemaField,
        owner: SchemaType,
        input_type: bool,
    ) -> list[Change]:
        changes: list[Change] = []
        path = f"types.{owner.name}.fields.{new.name}"
        subject = f"{owner.name}.{new.name}"

        if old.type != new.type:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.FIELD,
                rules.field_type_changed(),
                f"{path}.type",
                f"Field '{subject}' type changed from {old.type} to {new.type}",
                old_value=old.type,
                new_value=new.type,
                subject=subject,
            ))

        if old.required != new.required:
            state = "required" if new.required else "nullable"
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.FIELD,
                rules.field_required_changed(input_type, old.required, new.required),
                f"{path}.required",
                f"Field '{subject}' is now {state}",
                old_value=old.required,
                new_value=new.required,
                subject=subject,
            ))

        if old.default != new.default:
            changes.append(rules.make_change(
                ChangeType.MODIFIED,
                ChangeCategory.FIELD,
                rules.field_default_changed(),
                f"{path}.default",
                f"Field '{subject}' default changed from {old.default!r} to {new.default!r}",
                old_value=old.default,
                new_value=new.default,
                subject=subject,
            ))

        if not old.deprecated and new.deprecated:
            changes.append(rules.make_change(
                ChangeType.DEPRECATED,
                ChangeCategory.FIELD,
                rules.deprecation_changed(old.deprecated, new.deprecated),
                f"{path}.deprecated",
                f"Field '{subject}' is now deprecated",
                old_value=False,
                new_value=True,
                subject=subject,
            ))

        return changes

    def compare_enum_values(self, old: SchemaType, new: SchemaType) -> list[Change]:
        changes: list[Change] = []
        removed, added = _removed_and_added(old.enum_values, new.enum_values)

        for value in removed:
            changes.append(rules.make_change(
                ChangeType.REMOVED,
                ChangeCategory.ENUM_VALUE,
                rules.enum_value_removed(),
                f"types.{new.name}.values.{value}",
                f"Removed value '{value}' from enum {new.name}",
                old_value=value,
                subject=value,
            ))
        for value in added:
            changes.append(rules.make_change(
                ChangeType.ADDED,
                ChangeCategory.ENUM_VALUE,
                rules.enum_value_added(),
                f"types.{new.name}.values.{value}",
                f"Added value '{value}' to enum {new.name}",
                new_value=value,
                subject=value,
            ))
        return changes

    def compare_union_members(self, old: SchemaType, new: SchemaType) -> list[Change]:
        changes: list[Change] = []
        removed, added = _removed_and_added(old.members, new.members)

        for member in removed:
            changes.append(rules.make_change(
                ChangeType.REMOVED,
                ChangeCategory.UNION_MEMBER,
                rules.union_member_removed(),
                f"types.{new.name}.members.{member}",
                f"Removed member '{member}' from union {new.name}",
                old_value=member,
                subject=member,
            ))
        for member in added:
            changes.append(rules.make_change(
                ChangeType.ADDED,
                ChangeCategory.UNION_MEMBER,
                rules.union_member_added(),
                f"types.{new.name}.members.{member}",
                f"Added member '{member}' to union {new.name}",
                new_value=member,
                subject=member,
            ))
        return changes

    def compare_interfaces(self, old: SchemaType, new: SchemaType) -> list[Change]:
        changes: list[Change] = []
        removed, added = _removed_and_added(old.interfaces, new.interfaces)

        for interface in removed:
            changes.append(rules.make_change(
                ChangeType.REMOVED,
                ChangeCategory.TYPE,
                rules.interface_removed(),
                f"types.{new.name}.interfaces.{interface}",
                f"Type {new.name} no longer implements {interface}",
                old_value=interface,
                subject=interface,
            ))
        for interface in added:
            changes.append(rules.make_change(
                ChangeType.ADDED,
                ChangeCategory.TYPE,
                rules.interface_added(),
                f"types.{new.name}.interfaces.{interface}",
                f"Type {new.name} now implements {interface}",
                new_value=interface,
                subject=interface,
            ))
        return changes
