"""
Association descriptors: belongs-to, has-many and has-one-through.

A descriptor only records names. The target class is looked up by name every
time the association is read, so a model may declare an association to a class
that does not exist yet.

    class Cat(MiniRecord):
        owner = BelongsTo(class_name="Human", foreign_key="owner_id")
        home = HasOneThrough(through_name="owner", source_name="house")

    class Human(MiniRecord):
        class Meta:
            table_name = "humans"
        cats = HasMany(foreign_key="owner_id")
        house = BelongsTo()
"""
from minirecord.errors import ConfigurationError
from minirecord.naming import classify, underscore


class Association:
    kind = None

    def __init__(self, name=None):
        self.name = name

    def __set_name__(self, owner, name):
        if self.name is None:
            self.name = name
        self._bind_owner(owner)
        owner._association_registry.add(owner, self.name, self)

    def _bind_owner(self, owner):
        pass

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return self.resolve(instance)

    def __set__(self, instance, value):
        raise AttributeError(f"association '{self.name}' of {type(instance).__name__} is read-only")

    def resolve(self, instance):
        raise NotImplementedError


class KeyedAssociation(Association):
    """Shared part of BelongsTo and HasMany: a foreign key, a primary key and a class name."""

    def __init__(self, name=None, foreign_key=None, primary_key=None, class_name=None):
        super().__init__(name)
        self._foreign_key = foreign_key
        self._primary_key = primary_key
        self._class_name = class_name

    def __repr__(self):
        return (
            f"<{type(self).__name__} {self.name} class_name={self.class_name} "
            f"foreign_key={self.foreign_key} primary_key={self.primary_key}>"
        )

    @property
    def primary_key(self):
        return self._primary_key or "id"

    @property
    def class_name(self):
        if self._class_name:
            return self._class_name
        if self.name is None:
            raise ConfigurationError(f"{type(self).__name__} has no name to infer class_name from")
        return classify(self.name)

    def model_class(self):
        from minirecord.base import MiniRecord

        target = MiniRecord._type_registry.resolve(self.class_name)
        if target is None:
            raise ConfigurationError(
                f"association '{self.name}' refers to class '{self.class_name}', which is not declared"
            )
        return target

    def table_name(self):
        return self.model_class().table_name()


class BelongsTo(KeyedAssociation):
    kind = "belongs_to"

    @property
    def foreign_key(self):
        if self._foreign_key:
            return self._foreign_key
        if self.name is None:
            raise ConfigurationError("BelongsTo has no name to infer foreign_key from")
        return f"{self.name}_id"

    def resolve(self, instance):
        return instance._association_resolver.resolve_belongs_to(instance, self)

    def __set__(self, instance, value):
        if value is None:
            setattr(instance, self.foreign_key, None)
            return
        setattr(instance, self.foreign_key, getattr(value, self.primary_key))


class HasMany(KeyedAssociation):
    kind = "has_many"

    def __init__(self, name=None, self_class_name=None, foreign_key=None, primary_key=None, class_name=None):
        super().__init__(name, foreign_key=foreign_key, primary_key=primary_key, class_name=class_name)
        self.self_class_name = self_class_name

    def _bind_owner(self, owner):
        if self.self_class_name is None:
            self.self_class_name = owner.__name__

    @property
    def foreign_key(self):
        if self._foreign_key:
            return self._foreign_key
        if self.self_class_name is None:
            raise ConfigurationError(f"HasMany '{self.name}' has no owning class to infer foreign_key from")
        return f"{underscore(self.self_class_name)}_id"

    def resolve(self, instance):
        return instance._association_resolver.resolve_has_many(instance, self)


class HasOneThrough(Association):
    kind = "has_one_through"

    def __init__(self, name=None, through_name=None, source_name=None):
        super().__init__(name)
        if not through_name or not source_name:
            raise ConfigurationError("HasOneThrough needs both through_name and source_name")
        self.through_name = through_name
        self.source_name = source_name

    def __repr__(self):
        return f"<HasOneThrough {self.name} through={self.through_name} source={self.source_name}>"

    def resolve(self, instance):
        return instance._association_resolver.resolve_has_one_through(instance, self)
