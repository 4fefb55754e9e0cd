import datetime

from beanledger.model import (
    Amount,
    Cost,
    Posting,
    Span,
    Transaction,
    Tree,
)


def test_span_text_from_str():
    source = "  Assets:Cash  (10 + 20) USD"
    start = source.index("(")
    end = source.index(")") + 1
    assert Span(start, end).text(source) == "(10 + 20)"


def test_span_text_from_bytes():
    source = b"price AAPL 150.00 USD"
    start = source.index(b"150")
    assert Span(start, start + len(b"150.00")).text(source) == "150.00"


def test_span_uses_byte_offsets():
    source = "\u20ac 10"
    start = len("\u20ac ".encode("utf-8"))
    assert Span(start, start + 2).text(source) == "10"


def test_span_empty_or_invalid_returns_empty_string():
    assert Span(0, 3).text("") == ""
    assert Span(0, 3).text(None) == ""
    assert Span().text("something") == ""
    assert Span(2, 100).text("short") == ""
    assert Span(3, 1).text("abcdef") == ""


def test_amount_default_span_is_empty():
    amount = Amount("100.00", "USD")
    assert amount.span.text("100.00 USD") == ""
    assert amount.value == "100.00"
    assert amount.currency == "USD"


def test_postings_are_keyed_by_identity():
    first = Posting("Assets:Cash")
    second = Posting("Assets:Cash")
    mapping = {first: Amount("1", "USD"), second: Amount("2", "USD")}
    assert len(mapping) == 2
    assert mapping[first].value == "1"
    assert first != second


def test_transaction_lists_are_independent():
    date = datetime.date(2023, 1, 1)
    one = Transaction(date, "One")
    two = Transaction(date, "Two")
    one.postings.append(Posting("Assets:Cash"))
    assert two.postings == []
    assert len(one.postings) == 1


def test_cost_defaults():
    cost = Cost()
    assert cost.amount is None
    assert cost.is_merge is False
    assert cost.label == ""


def test_tree_collects_directives():
    tree = Tree()
    txn = Transaction(datetime.date(2021, 1, 1), "Test")
    tree.directives.append(txn)
    assert tree.directives == [txn]
    assert Tree().directives == []