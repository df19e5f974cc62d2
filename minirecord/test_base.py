import pytest

from minirecord.errors import RecordStateError, UnknownAttributeError


def test_all_returns_instances_of_the_model(models, engine):
    cats = models.Cat.all()
    assert engine.last_statement == ("SELECT cats.* FROM cats", ())
    assert [c.name for c in cats] == ["Breakfast", "Earl", "Haskell", "Markov", "Stray Cat"]
    assert all(type(c) is models.Cat for c in cats)

    humans = models.Human.all()
    assert all(type(h) is models.Human for h in humans)
    assert humans[0].fname == "Devon"


def test_find(models, engine):
    cat = models.Cat.find(3)
    assert engine.last_statement == ("SELECT cats.* FROM cats WHERE id = ?", (3,))
    assert cat.name == "Haskell"
    assert cat.owner_id == 3


def test_find_missing_returns_none(models):
    assert models.Cat.find(999) is None


def test_two_finds_give_distinct_instances(models):
    first = models.Cat.find(1)
    second = models.Cat.find(1)
    assert first is not second
    assert first.to_dict() == second.to_dict()


def test_where_example(models, engine):
    cats = models.Cat.where({"name": "Haskell"})
    assert engine.last_statement == ("SELECT cats.* FROM cats WHERE name = ?", ("Haskell",))
    assert len(cats) == 1
    assert cats[0].name == "Haskell"
    assert cats[0].owner_id == 3


def test_where_with_several_predicates(models, engine):
    humans = models.Human.where(fname="Matt", house_id=1)
    assert engine.last_statement == (
        "SELECT humans.* FROM humans WHERE fname = ? AND house_id = ?", ("Matt", 1)
    )
    assert [h.lname for h in humans] == ["Rubens"]


def test_where_without_predicates_matches_all(models):
    everything = [c.to_dict() for c in models.Cat.all()]
    assert [c.to_dict() for c in models.Cat.where({})] == everything
    assert [c.to_dict() for c in models.Cat.where()] == everything


def test_where_no_match_is_empty(models):
    assert models.Cat.where(name="Nobody") == []


def test_where_rejects_unknown_column(models):
    with pytest.raises(UnknownAttributeError):
        models.Cat.where({"name; DROP TABLE cats": "x"})


def test_value_with_quotes_is_stored_verbatim(models):
    cat = models.Cat(name="O'Malley; --?")
    cat.save()
    assert models.Cat.find(cat.id).name == "O'Malley; --?"
    assert len(models.Cat.all()) == 6


def test_insert_assigns_id(models, engine):
    cat = models.Cat(name="Gizmo", owner_id=1)
    cat.insert()
    assert engine.last_statement == (
        "INSERT INTO cats (id, name, owner_id) VALUES (?, ?, ?)", (None, "Gizmo", 1)
    )
    assert cat.id == 6
    assert models.Cat.find(6).name == "Gizmo"


def test_insert_then_find_round_trip(models):
    human = models.Human(fname="Ada", lname="Lovelace", house_id=2)
    human.save()
    loaded = models.Human.find(human.id)
    for column in models.Human.columns():
        assert getattr(loaded, column) == getattr(human, column)


def test_unset_columns_are_inserted_as_null(models):
    cat = models.Cat(name="Loner")
    cat.save()
    assert models.Cat.find(cat.id).owner_id is None


def test_insert_with_id_set_fails(models):
    cat = models.Cat.find(1)
    with pytest.raises(RecordStateError):
        cat.insert()


def test_update(models, engine):
    cat = models.Cat.find(2)
    cat.name = "Earl Grey"
    cat.update()
    assert engine.last_statement == (
        "UPDATE cats SET id = ?, name = ?, owner_id = ? WHERE id = ?", (2, "Earl Grey", 2, 2)
    )
    assert models.Cat.find(2).name == "Earl Grey"
    assert len(models.Cat.all()) == 5


def test_update_without_id_fails(models):
    with pytest.raises(RecordStateError):
        models.Cat(name="Gizmo").update()


def test_save_dispatches_on_primary_key(models, engine):
    cat = models.Cat(name="Gizmo")
    cat.save()
    assert engine.last_statement[0].startswith("INSERT INTO cats")

    cat.name = "Gizmo II"
    cat.save()
    assert engine.last_statement[0].startswith("UPDATE cats")
    assert models.Cat.find(cat.id).name == "Gizmo II"


def test_explicit_none_id_counts_as_new(models):
    cat = models.Cat(id=None, name="Gizmo")
    assert cat.is_new_record()
    cat.save()
    assert cat.id is not None


def test_destroy(models, engine):
    cat = models.Cat.find(5)
    cat.destroy()
    assert engine.last_statement == ("DELETE FROM cats WHERE id = ?", (5,))
    assert models.Cat.find(5) is None
    with pytest.raises(RecordStateError):
        models.Cat(name="Gizmo").destroy()


def test_reload(models):
    stale = models.Cat.find(1)
    fresh = models.Cat.find(1)
    fresh.name = "Second Breakfast"
    fresh.save()

    assert stale.reload().name == "Second Breakfast"

    fresh.destroy()
    with pytest.raises(RecordStateError):
        stale.reload()


def test_attribute_values_follow_column_order(models):
    cat = models.Cat(owner_id=2, name="Gizmo")
    assert cat.attribute_values() == [None, "Gizmo", 2]
    assert cat.to_dict() == {"id": None, "name": "Gizmo", "owner_id": 2}


def test_repr(models):
    assert repr(models.Cat.find(3)) == "<Cat(id=3)>"
    assert repr(models.Cat(name="Gizmo")) == "<Cat(id=New)>"


def test_transaction_groups_saves(models, engine):
    with pytest.raises(RuntimeError):
        with engine.transaction():
            models.Cat(name="Alpha").save()
            models.Cat(name="Beta").save()
            raise RuntimeError("abort")
    assert models.Cat.where(name="Alpha") == []

    with engine.transaction():
        models.Cat(name="Alpha").save()
        models.Cat(name="Beta").save()
    assert len(models.Cat.all()) == 7
