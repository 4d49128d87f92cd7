"""Unit tests for db/resources.py"""

import json

import pytest

from dominion_picker.constants import LOAD_ORDER, SINGLE_CARDS
from dominion_picker.db.card_types import RECORD_COLS
from dominion_picker.db.resources import (
    FileResources,
    MemoryResources,
    packaged_resources,
    resources_from_settings,
)
from dominion_picker.errors import ResourceError


def _write_resources(root, version=3, sets=None, singles=None):
    sets = sets or {"base": ["Village;+2 actions."]}
    singles = singles or {"prince": "Prince;Set aside."}
    manifest = {"db_version": version, "sets": {}, "singles": {}}
    for name, records in sets.items():
        (root / f"{name}.txt").write_text("\n".join(records) + "\n", encoding="utf-8")
        manifest["sets"][name] = f"{name}.txt"
    for name, record in singles.items():
        (root / f"{name}.txt").write_text(record + "\n", encoding="utf-8")
        manifest["singles"][name] = f"{name}.txt"
    (root / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
    return FileResources(root)


class TestMemoryResources:
    def test_serves_sets_and_singles(self):
        res = MemoryResources(4, {"base": ["A", "B"]}, {"prince": "P"})

        assert res.version() == 4
        assert res.card_set("base") == ["A", "B"]
        assert res.single_card("prince") == "P"

    def test_unknown_set_is_empty(self):
        assert MemoryResources(1).card_set("guilds") == []

    def test_unknown_single_raises(self):
        with pytest.raises(ResourceError):
            MemoryResources(1).single_card("prince")

    def test_returned_lists_are_copies(self):
        res = MemoryResources(1, {"base": ["A"]})

        res.card_set("base").append("B")

        assert res.card_set("base") == ["A"]


class TestFileResources:
    def test_reads_version_and_records(self, tmp_path):
        res = _write_resources(tmp_path, version=9)

        assert res.version() == 9
        assert res.card_set("base") == ["Village;+2 actions."]
        assert res.single_card("prince") == "Prince;Set aside."

    def test_skips_comments_and_blank_lines(self, tmp_path):
        res = _write_resources(
            tmp_path, sets={"base": ["# header", "", "A;a", "   ", "B;b"]}
        )

        assert res.card_set("base") == ["A;a", "B;b"]

    def test_keeps_trailing_empty_fields(self, tmp_path):
        res = _write_resources(tmp_path, sets={"base": ["A;a;;"]})

        assert res.card_set("base") == ["A;a;;"]

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ResourceError, match="not found"):
            FileResources(tmp_path).version()

    def test_malformed_manifest(self, tmp_path):
        (tmp_path / "manifest.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ResourceError):
            FileResources(tmp_path).version()

    def test_manifest_without_version(self, tmp_path):
        (tmp_path / "manifest.json").write_text('{"sets": {}}', encoding="utf-8")

        with pytest.raises(ResourceError, match="db_version"):
            FileResources(tmp_path).version()

    def test_unknown_set_name(self, tmp_path):
        res = _write_resources(tmp_path)

        with pytest.raises(ResourceError, match="guilds"):
            res.card_set("guilds")

    def test_missing_card_file(self, tmp_path):
        res = _write_resources(tmp_path)
        (tmp_path / "base.txt").unlink()

        with pytest.raises(ResourceError):
            res.card_set("base")

    def test_single_card_needs_exactly_one_record(self, tmp_path):
        res = _write_resources(tmp_path)
        (tmp_path / "prince.txt").write_text("A\nB\n", encoding="utf-8")

        with pytest.raises(ResourceError, match="exactly one"):
            res.single_card("prince")


class TestPackagedResources:
    def test_declares_version_seven(self):
        assert packaged_resources().version() == 7

    def test_every_set_and_single_is_present(self):
        res = packaged_resources()

        for name in LOAD_ORDER:
            assert res.card_set(name), f"empty set: {name}"
        for name in SINGLE_CARDS:
            assert res.single_card(name)

    def test_records_fit_the_table(self):
        res = packaged_resources()

        for name in LOAD_ORDER:
            for record in res.card_set(name):
                assert len(record.split(";")) == len(RECORD_COLS), record

    def test_fixed_cards_sit_at_their_ids(self):
        res = packaged_resources()
        records = [r for name in LOAD_ORDER for r in res.card_set(name)]

        assert records[0].split(";")[0] == "Black Market"
        assert records[160].split(";")[0] == "Young Witch"


class TestResourcesFromSettings:
    def test_defaults_to_packaged_data(self):
        from dominion_picker.config.settings import CatalogSettings

        res = resources_from_settings(CatalogSettings())

        assert res.version() == 7

    def test_uses_configured_directory(self, tmp_path):
        from dominion_picker.config.settings import CatalogSettings

        _write_resources(tmp_path, version=11)

        res = resources_from_settings(CatalogSettings(resources_dir=tmp_path))

        assert res.version() == 11


def test_empty_record_only_comes_from_memory(tmp_path):
    file_res = _write_resources(tmp_path, sets={"base": ["A;a", "", "B;b"]})

    assert file_res.card_set("base") == ["A;a", "B;b"]
    assert MemoryResources(1, {"base": ["A;a", "", "B;b"]}).card_set("base") == [
        "A;a",
        "",
        "B;b",
    ]
