"""Tests for the import pipeline."""

import copy
import logging

import openpyxl
import pytest

from contentful_localizer.exporter import LabelExporter
from contentful_localizer.importer import LabelImporter

from helpers import (
    DEFAULT_LOCALE,
    LOCALES,
    FakeStore,
    document,
    document_of,
    leaf_values,
    make_entry,
    page_type,
    paragraph,
    text,
)


def write_translations(path, rows, locales=("fr-FR",)):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "page"
    sheet.append(["Key", "English Text", *locales])
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)


def build_importer(store, path):
    importer = LabelImporter(store, DEFAULT_LOCALE, LOCALES, show_progress=False)
    importer.load_translations(path)
    return importer


class TestImportValue:
    """Test applying translations to single fields."""

    @pytest.fixture
    def translations(self, tmp_path):
        path = str(tmp_path / "in.xlsx")
        write_translations(
            path,
            [
                ["body", "Hello", "Bonjour", "Hallo"],
                ["body", "World", "Monde", None],
                ["title", "Hi", "Salut", "Hallo"],
            ],
            locales=("fr-FR", "de-DE"),
        )
        return path

    @pytest.mark.asyncio
    async def test_plain_string(self, translations):
        """A matching string gets the workbook translations."""
        entry = make_entry("e1", title="  Hi ")
        importer = build_importer(FakeStore(), translations)

        await importer.import_value(entry, "title")

        assert entry.fields["title"] == {"en-US": "  Hi ", "fr-FR": "Salut", "de-DE": "Hallo"}

    @pytest.mark.asyncio
    async def test_unmatched_string_is_unchanged(self, translations):
        """Strings without a row are left alone."""
        entry = make_entry("e1", title="Unknown")
        entry.fields["title"]["fr-FR"] = "Inconnu"
        importer = build_importer(FakeStore(), translations)

        await importer.import_value(entry, "title")

        assert entry.fields["title"] == {"en-US": "Unknown", "fr-FR": "Inconnu"}

    @pytest.mark.asyncio
    async def test_document_translations_accumulate(self, translations):
        """Each matched text is replaced in the same per-locale tree."""
        original = document(paragraph(text("Hello"), text(" World ")), paragraph(text("Other")))
        entry = make_entry("e1", body=copy.deepcopy(original))
        importer = build_importer(FakeStore(), translations)

        await importer.import_value(entry, "body")

        body = entry.fields["body"]
        assert body["en-US"] == original
        assert leaf_values(body["fr-FR"]) == ["Bonjour", "Monde", "Other"]
        assert leaf_values(body["de-DE"]) == ["Hallo", " World ", "Other"]

    @pytest.mark.asyncio
    async def test_existing_locale_tree_is_the_starting_point(self, translations):
        """Translations are applied onto the locale's current document."""
        entry = make_entry("e1", body=document_of("Hello", "World"))
        entry.fields["body"]["fr-FR"] = document_of("Hello", "Le monde")
        entry.fields["body"]["es-ES"] = document_of("Hola", "Mundo")
        importer = build_importer(FakeStore(), translations)

        await importer.import_value(entry, "body")

        body = entry.fields["body"]
        assert leaf_values(body["fr-FR"]) == ["Bonjour", "Le monde"]
        assert leaf_values(body["es-ES"]) == ["Hola", "Mundo"]

    @pytest.mark.asyncio
    async def test_empty_and_unmatched_documents(self, translations):
        """Empty documents and documents without matches are untouched."""
        empty = make_entry("e1", body=document())
        other = make_entry("e2", body=document_of("Nothing"))
        importer = build_importer(FakeStore(), translations)

        await importer.import_value(empty, "body")
        await importer.import_value(other, "body")

        assert empty.fields["body"] == {"en-US": document()}
        assert other.fields["body"] == {"en-US": document_of("Nothing")}

    @pytest.mark.asyncio
    async def test_default_locale_is_never_overwritten(self, tmp_path):
        """A default-locale column in the workbook is ignored."""
        path = str(tmp_path / "in.xlsx")
        write_translations(path, [["title", "Hi", "Changed", "Salut"]], locales=("en-US", "fr-FR"))
        entry = make_entry("e1", title="Hi", body=document_of("Hi"))
        importer = build_importer(FakeStore(), path)

        await importer.import_value(entry, "title")
        await importer.import_value(entry, "body")

        assert entry.fields["title"]["en-US"] == "Hi"
        assert entry.fields["body"]["en-US"] == document_of("Hi")
        assert entry.fields["title"]["fr-FR"] == "Salut"


class TestImportLabels:
    """Test the full import run."""

    @pytest.mark.asyncio
    async def test_export_then_import_round_trip(self, tmp_path):
        """Exported texts come back translated into every occurrence."""
        body = document_of("Hello", "World", "Hello")
        store = FakeStore(entries=[make_entry("e1", body=copy.deepcopy(body))], content_types=[page_type()])
        path = str(tmp_path / "roundtrip.xlsx")

        await LabelExporter(store, DEFAULT_LOCALE, show_progress=False).export_labels(path)

        workbook = openpyxl.load_workbook(path)
        sheet = workbook["page"]
        assert [row[1] for row in sheet.iter_rows(min_row=2, values_only=True)] == ["Hello", "World"]
        sheet.cell(row=1, column=3, value="fr-FR")
        sheet.cell(row=2, column=3, value="Bonjour")
        sheet.cell(row=3, column=3, value="Monde")
        workbook.save(path)

        importer = LabelImporter(store, DEFAULT_LOCALE, LOCALES, show_progress=False)
        await importer.import_labels(path)

        assert len(store.updated) == 1
        saved = store.updated[0].fields["body"]
        assert leaf_values(saved["fr-FR"]) == ["Bonjour", "Monde", "Bonjour"]
        assert saved["en-US"] == body
        assert store.published == ["e1"]

    @pytest.mark.asyncio
    async def test_failed_save_does_not_stop_the_run(self, tmp_path, caplog):
        """A failing entry is logged and the remaining entries are saved."""
        path = str(tmp_path / "in.xlsx")
        write_translations(path, [["title", "One", "Un"], ["title", "Two", "Deux"], ["title", "Three", "Trois"]])
        store = FakeStore(
            entries=[
                make_entry("e1", title="One"),
                make_entry("e2", title="Two"),
                make_entry("e3", title="Three"),
            ],
            content_types=[page_type()],
            fail_on=["e2"],
        )
        importer = LabelImporter(store, DEFAULT_LOCALE, LOCALES, show_progress=False)

        with caplog.at_level(logging.ERROR):
            await importer.import_labels(path)

        assert store.published == ["e1", "e3"]
        assert [entry.fields["title"]["fr-FR"] for entry in store.updated] == ["Un", "Trois"]
        assert "Failed to update item e2 : page" in caplog.text

    @pytest.mark.asyncio
    async def test_entries_without_eligible_fields_are_not_saved(self, tmp_path):
        """Only entries with an eligible field are updated."""
        path = str(tmp_path / "in.xlsx")
        write_translations(path, [["title", "One", "Un"]])
        store = FakeStore(
            entries=[make_entry("e1", slug="one"), make_entry("e2", title="One")],
            content_types=[page_type()],
        )
        importer = LabelImporter(store, DEFAULT_LOCALE, LOCALES, show_progress=False)

        await importer.import_labels(path)

        assert store.published == ["e2"]

    @pytest.mark.asyncio
    async def test_published_at_updated_version(self, tmp_path):
        """Publishing uses the entry returned by the update."""
        path = str(tmp_path / "in.xlsx")
        write_translations(path, [["title", "One", "Un"]])
        store = FakeStore(entries=[make_entry("e1", version=4, title="One")], content_types=[page_type()])
        importer = LabelImporter(store, DEFAULT_LOCALE, LOCALES, show_progress=False)

        await importer.import_labels(path)

        assert store.updated[0].version == 5
