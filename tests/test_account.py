import datetime

import pytest

from beanledger.account import Account, AccountType, parse_account_type


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Assets:Checking", AccountType.ASSETS),
        ("Liabilities:CreditCard", AccountType.LIABILITIES),
        ("Equity:Opening-Balances", AccountType.EQUITY),
        ("Income:Salary", AccountType.INCOME),
        ("Expenses:Food:Restaurant", AccountType.EXPENSES),
        ("Other:Thing", AccountType.UNKNOWN),
        ("", AccountType.UNKNOWN),
    ],
)
def test_parse_account_type(name, expected):
    assert parse_account_type(name) is expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Assets:Checking", "Assets"),
        ("Liabilities:CreditCard", "Liabilities"),
        ("Expenses:Food", "Expenses"),
        ("Other:Thing", "Unknown"),
    ],
)
def test_account_type_names(name, expected):
    assert str(parse_account_type(name)) == expected


def test_type_derived_from_name():
    assert Account("Income:Salary").type is AccountType.INCOME
    assert Account("Income:Salary", type=AccountType.EQUITY).type is AccountType.EQUITY


def test_never_opened_account_is_not_open():
    account = Account("Assets:Checking")
    assert account.is_open(datetime.date(2024, 1, 15)) is False


def test_open_on_and_after_open_date():
    opened = datetime.date(2024, 1, 1)
    account = Account("Assets:Checking", open_date=opened)
    assert account.is_open(opened) is True
    assert account.is_open(opened + datetime.timedelta(days=30)) is True
    assert account.is_open(opened - datetime.timedelta(days=1)) is False


def test_open_on_close_date_but_not_after():
    opened = datetime.date(2024, 1, 1)
    closed = datetime.date(2024, 12, 31)
    account = Account("Assets:Checking", open_date=opened, close_date=closed)
    assert account.is_open(closed) is True
    assert account.is_open(closed + datetime.timedelta(days=1)) is False
    assert account.is_closed() is True


def test_is_closed_without_close_date():
    account = Account("Assets:Checking", open_date=datetime.date(2024, 1, 1))
    assert account.is_closed() is False