"""Streamlit app for the expense tracker.

To run the app from the command line::

    streamlit run expense_tracker/Home.py

or use ``run_dashboard.py`` at the project root.
"""

from __future__ import annotations

import logging

import streamlit as st

from . import config
from .db import ExpenseStore
from .service import ExpenseService
from .ui import EDITING_STATE_KEY, ExpenseTrackerUI, streamlit_notifier

logger = logging.getLogger(__name__)

SERVICE_STATE_KEY = 'expense_service'


def get_service() -> ExpenseService:
    """Return the session's service, creating and loading it on first use."""
    if SERVICE_STATE_KEY not in st.session_state:
        config.ensure_data_directories()
        store = ExpenseStore(config.DB_PATH)
        store.init_db()
        service = ExpenseService(
            store,
            config.USER_ID,
            notifier=streamlit_notifier,
            currency_symbol=config.CURRENCY_SYMBOL,
        )
        service.refresh()
        logger.info("Loaded %d expenses for user %s", len(service.expenses), config.USER_ID)
        st.session_state[SERVICE_STATE_KEY] = service
    return st.session_state[SERVICE_STATE_KEY]


def main() -> None:
    """Entry point for the Streamlit app."""
    config.configure_logging()
    ui = ExpenseTrackerUI(currency_symbol=config.CURRENCY_SYMBOL)
    ui.setup_page_config()

    service = get_service()
    total_budget = ui.render_budget_sidebar(service)
    if st.sidebar.button("🔄 Refresh"):
        service.refresh()

    ui.render_header(service)
    dashboard_tab, expenses_tab, calendar_tab = st.tabs(["📊 Dashboard", "🧾 Expenses", "📅 Calendar"])

    with dashboard_tab:
        ui.render_dashboard(service.expenses, total_budget)
        ui.render_yearly_breakdown(service.expenses)

    with expenses_tab:
        editing_id = st.session_state.get(EDITING_STATE_KEY)
        editing = next((expense for expense in service.expenses if expense.id == editing_id), None)
        with st.expander("Edit Expense" if editing else "➕ Add Expense", expanded=editing is not None):
            ui.render_expense_form(service, editing)
            if editing and st.button("Cancel", key='cancel_edit'):
                st.session_state.pop(EDITING_STATE_KEY, None)
                st.rerun()
        ui.render_expense_list(service)

    with calendar_tab:
        ui.render_calendar(service.expenses)

