from laiai.commons.storage import LocalStorage


def test_missing_key_reads_as_none(tmp_path) -> None:  # type: ignore[no-untyped-def]
    storage = LocalStorage(root=tmp_path / "nested")
    assert storage.get_item("nope") is None
    assert storage.get_json("nope") is None


def test_json_round_trip_keeps_non_ascii(tmp_path) -> None:  # type: ignore[no-untyped-def]
    storage = LocalStorage(root=tmp_path)
    storage.set_json("lai_ai_daily_quote", {"translation": "Pathian nih “a dawt”"})

    assert storage.get_json("lai_ai_daily_quote") == {"translation": "Pathian nih “a dawt”"}
    assert "“" in storage.get_item("lai_ai_daily_quote")  # type: ignore[operator]


def test_keys_are_sanitized_into_the_root(tmp_path) -> None:  # type: ignore[no-untyped-def]
    storage = LocalStorage(root=tmp_path)
    storage.set_item("../escape/key", "v")

    assert storage.get_item("../escape/key") == "v"
    assert [p.parent for p in tmp_path.iterdir()] == [tmp_path]


def test_remove_item_is_idempotent(tmp_path) -> None:  # type: ignore[no-untyped-def]
    storage = LocalStorage(root=tmp_path)
    storage.set_item("k", "v")
    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None
