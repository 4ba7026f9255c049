import datetime as dt

import pytest

from expense_tracker.db import ExpenseNotFoundError, ExpenseStore, StoreError
from expense_tracker.models import ExpenseInput, ExpenseUpdate


def _input(title='Lunch', amount=250.0, category='Food & Dining', date='2024-02-03', description=None):
    return ExpenseInput(title=title, amount=amount, category=category, date=date, description=description)


def test_create_and_list_newest_first(store):
    first = store.create('alice', _input(title='Lunch'))
    second = store.create('alice', _input(title='Taxi', category='Transportation'))

    assert first.id != second.id
    assert first.date == dt.date(2024, 2, 3)
    assert [e.title for e in store.list('alice')] == ['Taxi', 'Lunch']


def test_list_is_scoped_by_user(store):
    store.create('alice', _input())
    assert store.list('bob') == []


def test_update_replaces_supplied_fields(store):
    created = store.create('alice', _input(description='with team'))
    updated = store.update('alice', created.id, ExpenseUpdate(amount=300.0, description=''))

    assert updated.amount == 300.0
    assert updated.title == 'Lunch'
    assert updated.description is None
    assert store.get('alice', created.id) == updated


def test_update_without_changes_returns_current_row(store):
    created = store.create('alice', _input())
    assert store.update('alice', created.id, ExpenseUpdate()) == created


def test_update_other_users_expense_is_not_found(store):
    created = store.create('alice', _input())
    with pytest.raises(ExpenseNotFoundError):
        store.update('bob', created.id, ExpenseUpdate(amount=1.0))
    assert store.get('alice', created.id).amount == 250.0


def test_delete(store):
    created = store.create('alice', _input())
    with pytest.raises(ExpenseNotFoundError):
        store.delete('bob', created.id)
    store.delete('alice', created.id)
    assert store.list('alice') == []
    with pytest.raises(ExpenseNotFoundError):
        store.delete('alice', created.id)


def test_budget_defaults_then_persists(store):
    assert store.get_budget('alice') == 50000.0
    store.set_budget('alice', 42000)
    store.set_budget('alice', 45000)
    assert store.get_budget('alice') == 45000.0
    assert store.get_budget('bob') == 50000.0


def test_missing_schema_surfaces_as_store_error(tmp_path):
    uninitialised = ExpenseStore(tmp_path / 'empty.db')
    with pytest.raises(StoreError):
        uninitialised.list('alice')


def test_unusable_data_directory_surfaces_as_store_error(tmp_path):
    blocker = tmp_path / 'not_a_directory'
    blocker.write_text('')
    with pytest.raises(StoreError):
        ExpenseStore(blocker / 'expenses.db').list('alice')
