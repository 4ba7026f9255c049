"""End-to-end checks of the Streamlit app using Streamlit's AppTest harness."""

import datetime as dt

import pytest
from streamlit.testing.v1 import AppTest

from conftest import ROOT
from expense_tracker import config
from expense_tracker.db import ExpenseStore
from expense_tracker.models import ExpenseInput
from expense_tracker.ui import EDITING_STATE_KEY

HOME = str(ROOT / 'expense_tracker' / 'Home.py')


@pytest.fixture
def app_store(tmp_path, monkeypatch):
    monkeypatch.setattr(config, 'DATA_DIR', tmp_path)
    monkeypatch.setattr(config, 'DB_PATH', tmp_path / 'expenses.db')
    monkeypatch.setattr(config, 'USER_ID', 'local')
    expense_store = ExpenseStore(tmp_path / 'expenses.db')
    expense_store.init_db()
    return expense_store


def _metric(at, label):
    return next(metric.value for metric in at.metric if metric.label == label)


def test_adding_expense_refreshes_totals_and_clears_form(app_store):
    at = AppTest.from_file(HOME, default_timeout=30).run()
    assert _metric(at, "Monthly") == '₹0'

    at.text_input(key='new_title').input("Dominos pizza")
    at.number_input(key='new_amount').set_value(500.0)
    at.selectbox(key='new_category').select("Food & Dining")
    at.text_area(key='new_description').input("Friday dinner")
    at.button(key='new_submit').click().run()

    assert not at.exception
    assert [expense.title for expense in app_store.list('local')] == ["Dominos pizza"]
    assert _metric(at, "Monthly") == '₹500'
    assert _metric(at, "Total Spent") == '₹500'
    assert at.text_input(key='new_title').value == ''
    assert at.text_area(key='new_description').value == ''
    assert at.selectbox(key='new_category').value is None


def test_updating_expense_leaves_edit_mode(app_store):
    existing = app_store.create('local', ExpenseInput(
        title='Lunch', amount=250, category='Food & Dining', date=dt.date.today(),
    ))
    at = AppTest.from_file(HOME, default_timeout=30).run()
    assert _metric(at, "Monthly") == '₹250'

    at.button(key=f"edit_{existing.id}_button").click().run()
    assert at.session_state[EDITING_STATE_KEY] == existing.id

    at.number_input(key=f"edit_{existing.id}_amount").set_value(300.0)
    at.button(key=f"edit_{existing.id}_submit").click().run()

    assert not at.exception
    assert EDITING_STATE_KEY not in at.session_state
    assert app_store.get('local', existing.id).amount == 300.0
    assert _metric(at, "Monthly") == '₹300'
