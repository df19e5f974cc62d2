from minirecord.associations import BelongsTo
from minirecord.errors import ConfigurationError


class AssociationResolver:
    """Traverses association descriptors, looking every class up by name at call time."""

    def __init__(self, query_builder, record_mapper):
        self.query_builder = query_builder
        self.record_mapper = record_mapper

    def resolve_belongs_to(self, instance, options):
        fk_val = instance._attributes.get(options.foreign_key)
        target_cls = options.model_class()
        if fk_val is None:
            return None
        return target_cls._find_by(options.primary_key, fk_val)

    def resolve_has_many(self, instance, options):
        pk_val = instance._attributes.get(options.primary_key)
        target_cls = options.model_class()
        if options.foreign_key not in target_cls.columns():
            raise ConfigurationError(
                f"has-many '{options.name}' expects a '{options.foreign_key}' column on "
                f"{target_cls.table_name()}, which has none"
            )
        if pk_val is None:
            return []
        return target_cls.where({options.foreign_key: pk_val})

    def resolve_has_one_through(self, instance, options):
        owner_cls = type(instance)
        through = self._belongs_to(owner_cls, options.through_name, options)
        through_cls = through.model_class()
        source = self._belongs_to(through_cls, options.source_name, options)
        source_cls = source.model_class()

        fk_val = instance._attributes.get(through.foreign_key)
        if fk_val is None:
            return None

        through_table = through_cls.table_name()
        source_table = source_cls.table_name()
        join_condition = self.query_builder.build_join_condition(
            through_table, source.foreign_key, source_table, source.primary_key
        )
        sql, params = self.query_builder.build_join_select(
            through_table, source_table, join_condition, through.primary_key, fk_val
        )
        rows = owner_cls.engine().execute(sql, params)
        results = self.record_mapper.hydrate_all(source_cls, rows)
        return results[0] if results else None

    def _belongs_to(self, model_cls, name, options):
        descriptor = model_cls._association_registry.get(model_cls, name)
        if not isinstance(descriptor, BelongsTo):
            raise ConfigurationError(
                f"has-one-through '{options.name}' needs '{name}' on {model_cls.__name__} "
                f"to be a belongs-to association, got {descriptor.kind}"
            )
        return descriptor
