"""Streamlit components for the expense tracker.

The components only render: numbers come from :mod:`analytics`,
:mod:`periods` and :mod:`reports`, and every change goes through an
:class:`~expense_tracker.service.ExpenseService`.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence, Tuple

import streamlit as st
from pydantic import ValidationError
from streamlit.errors import StreamlitAPIException

from . import analytics, periods, reports
from . import visualization as viz
from .categories import DEFAULT_CATEGORIES, OTHER_CATEGORY, category_names
from .classifier import suggest_for_title
from .formatting import format_currency, format_percentage
from .models import Expense, ExpenseInput, ExpenseUpdate
from .service import ExpenseService

CALENDAR_STATE_KEY = 'calendar_period'
EDITING_STATE_KEY = 'editing_expense_id'
PERIOD_OPTIONS = ("This month", "All time")
FORM_FIELDS = ('title', 'amount', 'category', 'date', 'description')
SORT_LABELS = dict(zip(analytics.SORT_KEYS, ("Date (newest)", "Amount (highest)", "Category")))


def streamlit_notifier(title: str, description: str, variant: str = 'default') -> None:
    """Show service feedback: errors inline, successes as a toast."""
    if variant == 'destructive':
        st.error(f"**{title}** {description}")
    else:
        st.toast(f"{title}: {description}")


def validation_messages(exc: ValidationError) -> List[str]:
    """One readable line per field error of a form submission."""
    messages = []
    for error in exc.errors():
        field = '.'.join(str(part) for part in error.get('loc', ())) or 'form'
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return messages


def _ensure_calendar_state(today: Optional[dt.date] = None) -> Tuple[int, int]:
    if CALENDAR_STATE_KEY not in st.session_state:
        today = today or dt.date.today()
        st.session_state[CALENDAR_STATE_KEY] = (today.month - 1, today.year)
    return st.session_state[CALENDAR_STATE_KEY]


def _navigate_calendar(step: int) -> Tuple[int, int]:
    month, year = _ensure_calendar_state()
    st.session_state[CALENDAR_STATE_KEY] = periods.shift_month(month, year, step)
    return st.session_state[CALENDAR_STATE_KEY]


def _reset_form_state(prefix: str) -> None:
    for field in FORM_FIELDS:
        st.session_state.pop(f"{prefix}_{field}", None)


def _expenses_for_period(expenses: Sequence[Expense], period: str, today: Optional[dt.date] = None) -> List[Expense]:
    if period == PERIOD_OPTIONS[0]:
        today = today or dt.date.today()
        return periods.filter_by_month(expenses, today.month - 1, today.year)
    return list(expenses)


class ExpenseTrackerUI:
    """Page sections for the dashboard, the expense list and the calendar."""
    _PAGE_CONFIGURED = False

    def __init__(self, currency_symbol: str = '₹'):
        self.currency_symbol = currency_symbol

    def money(self, amount: float) -> str:
        return format_currency(amount, self.currency_symbol)

    def setup_page_config(self) -> None:
        if ExpenseTrackerUI._PAGE_CONFIGURED:
            return
        try:
            st.set_page_config(
                page_title="Expense Tracker",
                page_icon="💸",
                layout="wide",
                initial_sidebar_state="expanded",
            )
        except StreamlitAPIException:
            # Already configured upstream.
            pass
        finally:
            ExpenseTrackerUI._PAGE_CONFIGURED = True

    def render_header(self, service: ExpenseService) -> None:
        col1, col2, col3 = st.columns([2, 1, 1])
        with col1:
            st.title("💸 Expense Tracker")
        with col2:
            st.metric("Monthly", self.money(service.monthly_total()))
        with col3:
            st.metric("Yearly", self.money(service.yearly_total()))

    def render_budget_sidebar(self, service: ExpenseService) -> float:
        """Budget setting in the sidebar; returns the budget currently in effect."""
        st.sidebar.header("Budget")
        current = service.get_budget()
        with st.sidebar.form("budget_form"):
            amount = st.number_input("Monthly budget", min_value=0.0, step=500.0, value=float(current))
            if st.form_submit_button("Save budget") and amount != current:
                if service.set_budget(amount):
                    current = amount
        st.sidebar.caption(f"Current budget: {self.money(current)}")
        return current

    # Dashboard

    def render_dashboard(self, expenses: Sequence[Expense], total_budget: float) -> None:
        period = st.radio("Period", PERIOD_OPTIONS, horizontal=True, key='dashboard_period')
        scoped = _expenses_for_period(expenses, period)

        snapshot = analytics.budget_snapshot(scoped, total_budget)
        spending = analytics.aggregate(scoped, DEFAULT_CATEGORIES, total_budget)

        col1, col2, col3 = st.columns(3)
        col1.metric("Total Spent", self.money(snapshot.total_spent),
                    help=f"{format_percentage(snapshot.spent_percentage)} of budget used")
        col2.metric("Remaining Budget", self.money(snapshot.remaining))
        col3.metric("Transactions", len(scoped))

        st.subheader("Budget Progress")
        st.progress(min(max(snapshot.spent_percentage, 0.0), 100.0) / 100)
        if snapshot.is_over_budget:
            st.warning(f"⚠️ Over budget by {self.money(snapshot.total_spent - snapshot.total_budget)}")
        else:
            st.caption(f"{format_percentage(100 - snapshot.spent_percentage)} remaining")

        frame = reports.category_spending_frame(spending)
        chart_col, list_col = st.columns([3, 2])
        with chart_col:
            pie_frame = reports.category_spending_frame(analytics.spending_chart_data(spending))
            st.plotly_chart(viz.create_category_pie_chart(pie_frame), use_container_width=True)
            st.plotly_chart(viz.create_budget_bar_chart(frame), use_container_width=True)
        with list_col:
            st.markdown("**Category Budgets**")
            for row in spending:
                st.markdown(f"{row.icon} **{row.category}**: {self.money(row.spent)} / {self.money(row.budget)}")
                st.progress(min(max(row.percentage, 0.0), 100.0) / 100)

        st.subheader("💡 Insights")
        for insight in analytics.generate_insights(spending):
            st.info(insight)

    def render_yearly_breakdown(self, expenses: Sequence[Expense], year: Optional[int] = None) -> None:
        year = year or dt.date.today().year
        breakdown = reports.yearly_breakdown_frame(expenses, year)
        st.plotly_chart(
            viz.create_yearly_bar_chart(breakdown, title=f"Spending in {year}"),
            use_container_width=True,
        )

    # Expenses

    def render_expense_form(self, service: ExpenseService, editing: Optional[Expense] = None) -> Optional[Expense]:
        """Add or edit form with live category suggestions; returns the saved expense."""
        prefix = f"edit_{editing.id}" if editing else 'new'
        st.subheader("Edit Expense" if editing else "Add New Expense")

        title = st.text_input(
            "Title",
            value=editing.title if editing else '',
            placeholder="Enter expense title",
            key=f"{prefix}_title",
        )
        category_key = f"{prefix}_category"
        suggestion = suggest_for_title(title, editing=editing is not None)
        if suggestion:
            note_col, use_col = st.columns([4, 1])
            note_col.caption(f"✨ Suggested category: {suggestion}")
            if use_col.button("Use", key=f"{prefix}_use_suggestion"):
                st.session_state[category_key] = suggestion

        options = list(category_names()) + [OTHER_CATEGORY]
        if editing and editing.category not in options:
            options.append(editing.category)
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                f"Amount ({self.currency_symbol})",
                min_value=0.0,
                step=0.01,
                value=float(editing.amount) if editing else 0.0,
                key=f"{prefix}_amount",
            )
            category = st.selectbox(
                "Category",
                options,
                index=options.index(editing.category) if editing else None,
                placeholder="Select a category",
                key=category_key,
            )
        with col2:
            date = st.date_input("Date", value=editing.date if editing else dt.date.today(), key=f"{prefix}_date")
            description = st.text_area(
                "Description (optional)",
                value=(editing.description or '') if editing else '',
                key=f"{prefix}_description",
            )

        if not st.button("Update Expense" if editing else "Add Expense", key=f"{prefix}_submit", type='primary'):
            return None

        try:
            data = ExpenseInput(
                title=title,
                amount=amount,
                category=category or '',
                date=date,
                description=description,
            )
        except ValidationError as exc:
            for message in validation_messages(exc):
                st.error(message)
            return None

        if editing:
            saved = service.update(editing.id, ExpenseUpdate(**data.model_dump()))
            if saved is not None:
                st.session_state.pop(EDITING_STATE_KEY, None)
        else:
            saved = service.add(data)
        if saved is not None:
            # Totals above the form were drawn from the previous snapshot.
            _reset_form_state(prefix)
            st.rerun()
        return saved

    def render_expense_list(self, service: ExpenseService) -> None:
        expenses = service.expenses
        col1, col2, col3 = st.columns([2, 1, 1])
        search = col1.text_input("Search", placeholder="Search expenses...", key='expense_search')
        category = col2.selectbox(
            "Category",
            [analytics.ALL_CATEGORIES] + sorted({expense.category for expense in expenses}),
            format_func=lambda value: "All categories" if value == analytics.ALL_CATEGORIES else value,
            key='expense_category_filter',
        )
        sort_by = col3.selectbox(
            "Sort by",
            list(SORT_LABELS),
            format_func=SORT_LABELS.get,
            key='expense_sort',
        )

        visible = analytics.sort_expenses(analytics.filter_expenses(expenses, search, category), sort_by)
        if not visible:
            if search or category != analytics.ALL_CATEGORIES:
                st.info("No expenses match your search criteria.")
            else:
                st.info("No expenses yet. Add your first expense above.")
            return

        for expense in visible:
            self._render_expense_row(service, expense)

    def _render_expense_row(self, service: ExpenseService, expense: Expense) -> None:
        row = reports.expense_table([expense]).iloc[0]
        info_col, amount_col, edit_col, delete_col = st.columns([5, 2, 1, 1])
        with info_col:
            st.markdown(f"{row['Icon']} **{expense.title}**  \n{expense.category} · {expense.date:%d %b %Y}")
            if expense.description:
                st.caption(expense.description)
        amount_col.markdown(f"**{self.money(expense.amount)}**")
        if edit_col.button("✏️", key=f"edit_{expense.id}_button", help="Edit expense"):
            st.session_state[EDITING_STATE_KEY] = expense.id
            st.rerun()
        if delete_col.button("🗑️", key=f"delete_{expense.id}_button", help="Delete expense"):
            if service.delete(expense.id):
                st.rerun()

    # Calendar

    def render_calendar(self, expenses: Sequence[Expense]) -> None:
        month, year = _ensure_calendar_state()
        prev_col, title_col, next_col = st.columns([1, 4, 1])
        if prev_col.button("◀", key='calendar_prev'):
            month, year = _navigate_calendar(-1)
        if next_col.button("▶", key='calendar_next'):
            month, year = _navigate_calendar(1)

        month_expenses = periods.filter_by_month(expenses, month, year)
        totals = periods.daily_totals(month_expenses)
        title_col.markdown(f"### {periods.MONTH_NAMES[month]} {year}")
        title_col.caption(f"Month total: {self.money(periods.sum_amounts(month_expenses))}")

        header = st.columns(7)
        for column, name in zip(header, periods.DAY_NAMES):
            column.markdown(f"**{name}**")
        for week in periods.calendar_weeks(periods.build_calendar_grid(month, year)):
            cells = st.columns(7)
            for column, day in zip(cells, week):
                if day is None:
                    column.write("")
                    continue
                column.markdown(f"**{day}**")
                if day in totals:
                    column.caption(self.money(totals[day]))

        self._render_day_details(month_expenses)

    def _render_day_details(self, month_expenses: Iterable[Expense]) -> None:
        by_day = periods.group_by_day(month_expenses)
        if not by_day:
            st.info("No expenses recorded this month.")
            return
        day = st.selectbox("Day details", sorted(by_day), key='calendar_day')
        st.dataframe(reports.expense_table(by_day[day]), use_container_width=True, hide_index=True)
