import pytest

from i18n_sheets.locale_store import LocaleFileError, LocaleStatus, LocaleStore


def test_no_locales_dir_is_fresh():
    lookup = LocaleStore(None).lookup("zh", "agent")

    assert lookup.status is LocaleStatus.FRESH
    assert lookup.tree == {}
    assert lookup.writable


def test_missing_language_folder_is_new_language(tmp_path):
    (tmp_path / "en").mkdir()

    lookup = LocaleStore(tmp_path).lookup("th", "agent")

    assert lookup.status is LocaleStatus.NEW_LANGUAGE
    assert lookup.tree == {}
    assert lookup.writable


def test_missing_file_is_not_writable(tmp_path):
    (tmp_path / "zh").mkdir()

    lookup = LocaleStore(tmp_path).lookup("zh", "agent")

    assert lookup.status is LocaleStatus.MISSING_FILE
    assert lookup.path == tmp_path / "zh" / "agent.json"
    assert not lookup.writable


def test_existing_file_is_loaded(tmp_path, write_json):
    write_json(tmp_path / "zh" / "agent.json", {"x": {"y": "old"}})

    lookup = LocaleStore(tmp_path).lookup("zh", "agent")

    assert lookup.status is LocaleStatus.EXISTING
    assert lookup.tree == {"x": {"y": "old"}}


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "zh" / "agent.json"
    path.parent.mkdir()
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LocaleFileError):
        LocaleStore(tmp_path).lookup("zh", "agent")


def test_non_object_json_raises(tmp_path, write_json):
    write_json(tmp_path / "zh" / "agent.json", ["a", "b"])

    with pytest.raises(LocaleFileError):
        LocaleStore(tmp_path).lookup("zh", "agent")
