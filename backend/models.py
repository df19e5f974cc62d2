from minirecord import MiniRecord, BelongsTo, HasMany, HasOneThrough


class ShelterRecord(MiniRecord):
    class Meta:
        abstract = True


class Cat(ShelterRecord):
    owner = BelongsTo(class_name="Human")
    home = HasOneThrough(through_name="owner", source_name="house")


class Human(ShelterRecord):
    class Meta:
        table_name = "humans"
    cats = HasMany(foreign_key="owner_id")
    house = BelongsTo()


class House(ShelterRecord):
    humans = HasMany()


MODELS = (Cat, Human, House)
