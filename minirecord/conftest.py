from types import SimpleNamespace

import pytest

from minirecord.associations import BelongsTo, HasMany
from minirecord.base import MiniRecord
from minirecord.database import DatabaseEngine

SCHEMA = """
CREATE TABLE houses (
    id INTEGER PRIMARY KEY,
    address VARCHAR(255) NOT NULL
);

CREATE TABLE humans (
    id INTEGER PRIMARY KEY,
    fname VARCHAR(255) NOT NULL,
    lname VARCHAR(255) NOT NULL,
    house_id INTEGER,
    FOREIGN KEY(house_id) REFERENCES houses(id)
);

CREATE TABLE cats (
    id INTEGER PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    owner_id INTEGER,
    FOREIGN KEY(owner_id) REFERENCES humans(id)
);

INSERT INTO houses (id, address) VALUES (1, '26th and Guerrero'), (2, 'Dolores and Market');

INSERT INTO humans (id, fname, lname, house_id) VALUES
    (1, 'Devon', 'Watts', 1),
    (2, 'Matt', 'Rubens', 1),
    (3, 'Ned', 'Ruggeri', 2),
    (4, 'Catless', 'Human', NULL);

INSERT INTO cats (id, name, owner_id) VALUES
    (1, 'Breakfast', 1),
    (2, 'Earl', 2),
    (3, 'Haskell', 3),
    (4, 'Markov', 3),
    (5, 'Stray Cat', NULL);
"""


class RecordingEngine(DatabaseEngine):
    """DatabaseEngine that keeps every statement it ran, for asserting on generated SQL."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.statements = []
        self.discovered = []

    def execute(self, sql, params=None):
        self.statements.append((sql, tuple(params or ())))
        return super().execute(sql, params)

    def execute_insert(self, sql, params=None):
        self.statements.append((sql, tuple(params or ())))
        return super().execute_insert(sql, params)

    def discover_columns(self, table_name):
        self.discovered.append(table_name)
        return super().discover_columns(table_name)

    @property
    def last_statement(self):
        return self.statements[-1]


@pytest.fixture(autouse=True)
def clean_type_registry():
    MiniRecord._type_registry.clear()
    yield
    MiniRecord._type_registry.clear()


@pytest.fixture
def engine():
    engine = RecordingEngine(":memory:")
    engine.execute_script(SCHEMA)
    MiniRecord.bind(engine)
    yield engine
    MiniRecord.bind(None)
    engine.close()


@pytest.fixture
def models(engine):
    class Cat(MiniRecord):
        owner = BelongsTo(class_name="Human")

    Cat.has_one_through("home", "owner", "house")

    class Human(MiniRecord):
        class Meta:
            table_name = "humans"

        cats = HasMany(foreign_key="owner_id")
        house = BelongsTo()

    class House(MiniRecord):
        humans = HasMany()

    for model in (Cat, Human, House):
        model.finalize()
    engine.statements.clear()
    return SimpleNamespace(Cat=Cat, Human=Human, House=House)
