import fitz
import pytest

from pdfpack import (
    ExportFailed,
    Item,
    ItemKind,
    PackOptions,
    UnsupportedFile,
    assemble,
    concatenate,
    item_from_path,
)
from pdfpack.finisher import finish
from pdfpack.toc import TITLE_TEXT, TocResult


def _annotation_texts(page):
    return [
        annot.info.get("content", "")
        for annot in page.annots()
        if annot.type[1] == "FreeText"
    ]


def _goto_targets(page):
    return [link["page"] for link in page.get_links() if link["kind"] == fitz.LINK_GOTO]


def test_no_items_gives_toc_only_document():
    result = assemble([])

    assert result.page_count == 1
    assert result.toc_page_count == 1
    assert result.links == []
    page = result.document[0]
    assert TITLE_TEXT in page.get_text()
    assert _goto_targets(page) == []
    assert _annotation_texts(page) == ["1"]


def test_mixed_items_page_numbers(make_pdf, make_png):
    items = [
        item_from_path(make_pdf("a.pdf", pages=1), title="A"),
        item_from_path(make_pdf("b.pdf", pages=2), title="B"),
        item_from_path(make_png("c.png"), title="C"),
    ]

    content = concatenate(items)
    assert [entry.page for entry in content.entries] == [1, 2, 4]
    assert content.page_count == 4

    result = assemble(items)

    assert result.page_count == 5
    assert result.toc_page_count == 1
    assert [link.target_page_index + 1 for link in result.links] == [2, 3, 5]
    assert _goto_targets(result.document[0]) == [1, 2, 4]


def test_page_count_is_toc_plus_sections(make_pdf, make_text):
    items = [
        item_from_path(make_pdf("one.pdf", pages=3)),
        item_from_path(make_text("two.txt", "\n".join(str(i) for i in range(100)))),
    ]

    result = assemble(items)

    assert result.page_count == result.toc_page_count + 3 + 3
    assert result.content_page_count == 6
    assert len(result.headers) == 6


def test_links_never_point_into_the_toc(make_text):
    items = [item_from_path(make_text(f"n{i}.txt", "x")) for i in range(45)]

    result = assemble(items)

    assert result.toc_page_count == 2
    assert result.page_count == 47
    for link in result.links:
        assert result.toc_page_count <= link.target_page_index < result.page_count
    assert _goto_targets(result.document[1]) == list(range(42, 47))


def test_headers_and_page_numbers_are_overlaid(make_pdf):
    items = [item_from_path(make_pdf("a.pdf", pages=2), title="Alpha", description="first")]

    result = assemble(items)

    assert _annotation_texts(result.document[0]) == ["1"]
    content_texts = _annotation_texts(result.document[1])
    assert "Alpha — first" in content_texts
    assert "2" in content_texts
    assert sorted(_annotation_texts(result.document[2])) == sorted(["Alpha — first", "3"])
    for page in result.document:
        assert any(annot.type[1] == "Line" for annot in page.annots())


def test_unknown_item_fails_and_names_it(make_pdf, tmp_path):
    bad = tmp_path / "archive.zip"
    bad.write_bytes(b"PK")
    items = [
        item_from_path(make_pdf("a.pdf")),
        item_from_path(bad, title="Archive"),
    ]

    with pytest.raises(UnsupportedFile) as excinfo:
        assemble(items)

    assert excinfo.value.item_index == 1
    assert excinfo.value.item_title == "Archive"
    assert "Archive" in str(excinfo.value)


def test_progress_callback_sees_every_item(make_text):
    items = [item_from_path(make_text(f"p{i}.txt", "hi")) for i in range(3)]
    calls = []

    assemble(items, progress_callback=lambda i, total, msg: calls.append((i, total)))

    assert calls == [(0, 3), (1, 3), (2, 3), (3, 3)]


def test_save_writes_a_readable_pdf(make_text, tmp_path):
    result = assemble(
        [item_from_path(make_text("a.txt", "hello"))],
        PackOptions(metadata_enabled=True, pdf_title="Bundle", pdf_author="Ops"),
    )
    output = tmp_path / "out" / "combined.pdf"
    output.parent.mkdir()

    result.save(output)

    with fitz.open(output) as saved:
        assert len(saved) == 2
        assert saved.metadata["title"] == "Bundle"
        assert saved.metadata["author"] == "Ops"
        assert _goto_targets(saved[0]) == [1]


def test_to_bytes_round_trips(make_pdf):
    data = assemble([item_from_path(make_pdf("a.pdf"))], PackOptions(compress=False)).to_bytes()

    with fitz.open(stream=data, filetype="pdf") as reopened:
        assert len(reopened) == 2


def test_item_kind_is_taken_from_the_item(make_text):
    path = make_text("readme.txt", "plain")
    item = Item(source=path, title="Readme", kind=ItemKind.PDF)

    with pytest.raises(UnsupportedFile):
        assemble([item])


def test_non_latin_title_and_body_survive(make_text):
    item = item_from_path(make_text("ru.txt", "Привет мир"), title="Отчёт")

    result = assemble([item])

    assert "Отчёт" in result.document[0].get_text()
    assert "Привет мир" in result.document[1].get_text()
    assert "Отчёт" in _annotation_texts(result.document[1])


def test_finish_rejects_missing_table_of_contents():
    with fitz.open() as content:
        with pytest.raises(ExportFailed):
            finish(TocResult(document=None), content, [])


def test_to_bytes_on_closed_document_fails(make_text):
    result = assemble([item_from_path(make_text("a.txt", "hello"))])
    result.close()

    with pytest.raises(ExportFailed):
        result.to_bytes()


def test_save_into_missing_directory_leaves_nothing(make_text, tmp_path):
    result = assemble([item_from_path(make_text("a.txt", "hello"))])
    before = sorted(tmp_path.iterdir())

    with pytest.raises(ExportFailed):
        result.save(tmp_path / "missing" / "combined.pdf")

    assert sorted(tmp_path.iterdir()) == before
    assert not (tmp_path / "missing").exists()
