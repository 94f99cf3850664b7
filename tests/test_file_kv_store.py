"""Tests for the local file key-value store."""

from freshfocus.adapters.file_kv_store import FileKeyValueStore
from freshfocus.domain.ingredients import IngredientDraft
from freshfocus.services.inventory import IngredientStore


def test_get_missing_key_returns_none(tmp_path) -> None:
    store = FileKeyValueStore(tmp_path / "data")

    assert store.get("freshfocus_ingredients") is None


def test_set_then_get_round_trip(tmp_path) -> None:
    store = FileKeyValueStore(tmp_path / "data")

    store.set("freshfocus_ingredients", '{"version":1}')
    store.set("freshfocus_ingredients", '{"version":1,"ingredients":[]}')

    assert store.get("freshfocus_ingredients") == '{"version":1,"ingredients":[]}'
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == [
        "freshfocus_ingredients.json"
    ]


def test_unsafe_key_characters_stay_inside_data_dir(tmp_path) -> None:
    store = FileKeyValueStore(tmp_path)

    store.set("../escape/key", "value")

    assert store.get("../escape/key") == "value"
    assert (tmp_path / ".._escape_key.json").exists()


def test_ingredient_store_survives_restart(tmp_path) -> None:
    kv = FileKeyValueStore(tmp_path)
    store = IngredientStore.load(kv)
    store.add([IngredientDraft(name="Milk", quantity=2, unit="L")])

    reloaded = IngredientStore.load(FileKeyValueStore(tmp_path))

    assert reloaded.all() == store.all()
