import csv
import io

from contracts.d2_catalog_dto import CatalogEntry
from src.catalog.export.woocommerce_feed import FEED_HEADER, build_row, render_csv


def entry(**fields):
    defaults = dict(
        id="1234567890abcdef",
        title="The Hobbit",
        author="J.r.r. Tolkien",
        synopsis="A hobbit's journey.",
        price="380",
        category="Fiction",
    )
    defaults.update(fields)
    return CatalogEntry(**defaults)


def test_header():
    assert FEED_HEADER[:3] == ("parent_sku", "sku", "post_title")
    assert FEED_HEADER[-3:] == ("tax:product_type", "tax:product_cat", "tax:product_tag")
    assert len(FEED_HEADER) == 16


def test_row_values():
    row = dict(zip(FEED_HEADER, build_row(entry(), "https://img/1.jpeg")))

    assert row["parent_sku"] == ""
    assert row["sku"] == "12345678"
    assert row["post_title"] == "The Hobbit – J.r.r. Tolkien"
    assert row["post_excerpt"] == row["post_content"] == "A hobbit's journey."
    assert row["post_status"] == "publish"
    assert row["regular_price"] == "380"
    assert row["stock_status"] == "instock"
    assert row["stock"] == "1"
    assert row["manage_stock"] == "yes"
    assert row["Images"] == "https://img/1.jpeg"
    assert row["tax:product_type"] == "simple"
    assert row["tax:product_tag"] == "J.r.r. Tolkien"


def test_category_slashes_become_commas():
    row = build_row(entry(category="Non-Fiction / Memoirs / Biographies"), "")

    assert row[FEED_HEADER.index("tax:product_cat")] == "Non-Fiction , Memoirs , Biographies"


def test_quotes_are_doubled():
    """Тест: кавычки внутри поля удваиваются, поле берётся в кавычки."""
    text = render_csv([build_row(entry(title='The "Great" Book'), "")])

    assert '"The ""Great"" Book – J.r.r. Tolkien"' in text


def test_synopsis_quotes_are_doubled():
    """Тест: каждая кавычка синопсиса удваивается в обеих колонках описания."""
    text = render_csv([build_row(entry(synopsis='He said "run" and "hide".'), "")])

    assert text.count('"He said ""run"" and ""hide""."') == 2


def test_multiline_synopsis_round_trips():
    rows = [build_row(entry(synopsis="Line one,\nline two."), ""), build_row(entry(), "")]

    parsed = list(csv.reader(io.StringIO(render_csv(rows))))

    assert len(parsed) == 3
    assert parsed[0] == list(FEED_HEADER)
    assert parsed[1][3] == "Line one,\nline two."
