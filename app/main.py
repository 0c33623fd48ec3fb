import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.express as px

from tracker.catalog import catalog_keys
from tracker.config import configure_logging
from tracker.functional import ValidationError, safe_category
from tracker.services import ExpenseTracker

configure_logging()
st.set_page_config(page_title="AI Expense Tracker", layout="wide")

if "tracker" not in st.session_state:
    st.session_state.tracker = ExpenseTracker()

tracker: ExpenseTracker = st.session_state.tracker
catalog = tracker.catalog


def category_name(key: str) -> str:
    cat = safe_category(catalog, key).get_or_else(None)
    return f"{cat.icon} {cat.title}".strip() if cat else key


def expenses_df() -> pd.DataFrame:
    rows = [
        {
            "id": e.id,
            "date": e.date,
            "category": category_name(e.category),
            "description": e.description,
            "amount": e.amount,
        }
        for e in tracker.recent_expenses()
    ]
    return pd.DataFrame(rows, columns=["id", "date", "category", "description", "amount"])


st.sidebar.markdown("### 🧠 AI Expense Tracker")
# filled after the page body so an add on this run is included
total_slot = st.sidebar.empty()

menu = st.sidebar.radio(
    "Menu",
    ["➕ Add Expense", "📊 Dashboard", "💡 AI Insights", "🔮 Predictions"]
)

if menu == "➕ Add Expense":
    col_form, col_list = st.columns(2)
    with col_form:
        st.subheader("➕ Add New Expense")
        with st.form("expense_form", clear_on_submit=True):
            amount = st.number_input("Amount ($)", min_value=0.0, step=1.0, format="%.2f")
            category = st.selectbox(
                "Category",
                catalog_keys(catalog),
                format_func=category_name,
            )
            description = st.text_input("Description", placeholder="What did you spend on?")
            date = st.date_input("Date")
            submitted = st.form_submit_button("Add Expense")

        if submitted:
            seen_alerts = len(tracker.alerts)
            try:
                tracker.add_expense(amount, category, description, date)
            except ValidationError as e:
                st.error(f"❌ {e.message}")
            else:
                st.success("✅ Expense added!")
                for alert in tracker.alerts[seen_alerts:]:
                    st.warning(f"⚠️ {alert['message']}")

    with col_list:
        st.subheader("📅 Recent Expenses")
        records = tracker.recent_expenses()
        if not records:
            st.info("No expenses yet. Add your first one!")
        for e in records:
            c1, c2, c3 = st.columns([4, 2, 1])
            c1.markdown(f"**{e.description}**  \n{e.date:%Y-%m-%d}")
            c2.markdown(f"${e.amount:,.2f}")
            if c3.button("🗑️", key=f"del_{e.id}"):
                tracker.delete_expense(e.id)
                st.rerun()

elif not tracker.expenses():
    st.info("📊 No data yet. Start adding expenses to see insights and predictions.")

elif menu == "📊 Dashboard":
    stats = tracker.get_summary()
    k1, k2, k3 = st.columns(3)
    k1.metric("Total Expenses", f"${stats['total_spent']:,.2f}")
    k2.metric("Transactions", stats["count"])
    k3.metric("Avg per Day", f"${stats['avg_per_day']:,.2f}")

    col_pie, col_bar = st.columns(2)
    with col_pie:
        totals = pd.DataFrame(tracker.get_category_totals())
        fig_pie = px.pie(
            totals,
            values="value",
            names="label",
            color="label",
            color_discrete_map=dict(zip(totals["label"], totals["color"])),
            title="Spending by Category",
        )
        st.plotly_chart(fig_pie, use_container_width=True)
    with col_bar:
        daily = pd.DataFrame(tracker.get_daily_totals())
        fig_bar = px.bar(daily, x="day", y="amount", title=f"Daily Spending (Last {tracker.window} Days)")
        st.plotly_chart(fig_bar, use_container_width=True)

    monthly = pd.DataFrame(tracker.get_monthly_totals())
    fig_line = px.line(monthly, x="month", y="total", markers=True, title="Monthly Trend")
    st.plotly_chart(fig_line, use_container_width=True)

    df = expenses_df()
    st.dataframe(df.drop(columns=["id"]), use_container_width=True)
    st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="expenses.csv")

elif menu == "💡 AI Insights":
    insights = tracker.get_insights()
    if insights["warnings"]:
        st.error(f"⚠️ Budget Warnings: you've exceeded budget in {', '.join(insights['warnings'])}")

    col_bad, col_good = st.columns(2)
    with col_bad:
        st.subheader("📉 Areas of Concern")
        if not insights["overspending"]:
            st.success("✅ Great job! No overspending detected.")
        for item in insights["overspending"]:
            st.markdown(f"**{item['category']}** {item['percent']:.0f}%")
            st.progress(min(100, item["percent"]) / 100)
            st.caption(f"${item['spent']:,.2f} of ${item['budget']:,.0f} budget")
    with col_good:
        st.subheader("📈 Good Spending Habits")
        if not insights["good_spending"]:
            st.caption("Keep tracking to see progress!")
        for item in insights["good_spending"]:
            st.markdown(f"**{item['category']}** {item['percent']:.0f}%")
            st.progress(item["percent"] / 100)

    st.subheader("💰 AI Savings Suggestions")
    if not insights["savings_tips"]:
        st.write("Your spending looks good! Keep it up!")
    for tip in insights["savings_tips"]:
        st.markdown(f"{tip['icon']} **{category_name(tip['key'])}**: {tip['tip']}  \n"
                    f"➡️ Potential savings: **${tip['potential']}/month**")
    if insights["savings_tips"]:
        st.metric(
            "Total Potential Savings",
            f"${insights['total_potential_savings']}/month",
            f"${insights['yearly_savings']:,} per year",
        )

elif menu == "🔮 Predictions":
    prediction = tracker.get_forecast()
    st.subheader("🧠 Next Month Prediction")
    if prediction["confidence"] == "low" and "message" in prediction:
        st.info(f"Need at least 5 expenses for predictions ({prediction['message']}).")
    else:
        p1, p2, p3 = st.columns(3)
        p1.metric("Predicted Total", f"${prediction['next_month_total']}")
        p2.metric("Confidence Level", prediction["confidence"].upper())
        p3.metric("Trend", "📈 UP" if prediction["trend"] == "increasing" else "📊 STABLE")

        preds = pd.DataFrame(prediction["category_predictions"])
        fig_pred = px.bar(
            preds,
            x="category",
            y="predicted",
            color="category",
            color_discrete_map=dict(zip(preds["category"], preds["color"])),
            title="Predicted Category Breakdown",
        )
        st.plotly_chart(fig_pred, use_container_width=True)

        st.subheader("💡 AI Recommendations")
        for line in prediction["recommendations"]:
            st.markdown(f"- {line}")

total_slot.metric("Total Spent", f"${tracker.get_summary()['total_spent']:,.2f}")
