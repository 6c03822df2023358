"""Streamlit dashboard for the inventory ledger.

Replaceable UI layer: all display logic lives here, data access goes
through the service layer only.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from app.config import get_frontend_settings, get_upload_settings
from frontend.charts import overview_frame, product_metric_frame
from ledger.aggregator import DayRange

# ── Page config (must be first Streamlit call) ─────────────────────────────
st.set_page_config(
    page_title="Inventory Ledger",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ── Lazy backend import (avoids DB init cost until needed) ─────────────────
@st.cache_resource(show_spinner=False)
def _load_backend_handles():
    from app.services import (  # noqa: PLC0415
        get_assistant_service,
        get_chart_data_service,
        get_data_set_service,
        get_upload_service,
    )
    from db.session import SessionLocal  # noqa: PLC0415

    return {
        "session_factory": SessionLocal,
        "upload": get_upload_service(),
        "chart": get_chart_data_service(),
        "data_sets": get_data_set_service(),
        "assistant": get_assistant_service(),
    }


# ── Session state defaults ─────────────────────────────────────────────────
_STATE_DEFAULTS: dict = {
    "selected_data_set_id": None,
    "assistant_answer": None,
}

for _key, _val in _STATE_DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _val


backend = _load_backend_handles()
frontend_settings = get_frontend_settings()


def _with_session(callback):
    db = backend["session_factory"]()
    try:
        return callback(db)
    finally:
        db.close()


# ── Sidebar: upload + dataset picker ───────────────────────────────────────
with st.sidebar:
    st.title("Inventory Ledger")
    st.caption("Daily inventory, sales and procurement")
    st.divider()

    allowed = sorted(ext.lstrip(".") for ext in get_upload_settings().allowed_extensions)
    uploaded_file = st.file_uploader("Upload spreadsheet", type=allowed)
    dataset_name = st.text_input("Dataset name (optional)")
    if st.button("Upload", type="primary", use_container_width=True, disabled=uploaded_file is None):
        try:
            summary = _with_session(
                lambda db: backend["upload"].ingest(
                    content=uploaded_file.getvalue(),
                    file_name=uploaded_file.name,
                    db=db,
                    dataset_name=dataset_name or None,
                )
            )
        except Exception as exc:  # noqa: BLE001
            st.error(f"Upload failed: {exc}")
        else:
            st.session_state.selected_data_set_id = summary.data_set_id
            st.success(
                f"Stored {summary.products_count} products over {summary.days_processed} days"
                + (f" ({summary.rows_skipped} rows skipped)" if summary.rows_skipped else "")
            )

    st.divider()
    listings = _with_session(lambda db: backend["data_sets"].list_data_sets(db=db))
    if not listings:
        st.info("No datasets yet.")
        selected = None
    else:
        ids = [item.id for item in listings]
        labels = {item.id: f"{item.name} ({item.product_count} products)" for item in listings}
        current = st.session_state.selected_data_set_id
        selected = st.selectbox(
            "Dataset",
            ids,
            index=ids.index(current) if current in ids else 0,
            format_func=labels.get,
        )
        st.session_state.selected_data_set_id = selected


# ── Helper renderers ───────────────────────────────────────────────────────
def _render_charts(data_set_id: int) -> None:
    full = _with_session(lambda db: backend["chart"].get_chart_data(db=db, data_set_id=data_set_id))
    if not full.products:
        st.info("This dataset has no products.")
        return

    day_bounds: Optional[DayRange] = full.summary.day_range
    cols = st.columns([3, 2])
    names_by_id = {product.id: product.name for product in full.products}
    chosen_ids = cols[0].multiselect(
        "Products",
        list(names_by_id),
        default=list(names_by_id),
        format_func=names_by_id.get,
    )
    start, end = cols[1].slider(
        "Days",
        min_value=day_bounds.start,
        max_value=max(day_bounds.end, day_bounds.start + 1),
        value=(day_bounds.start, day_bounds.end),
    )

    chart = _with_session(
        lambda db: backend["chart"].get_chart_data(
            db=db,
            data_set_id=data_set_id,
            product_ids=chosen_ids,
            day_range=DayRange(start=start, end=end),
        )
    )

    metrics = st.columns(3)
    metrics[0].metric("Products", full.summary.total_products)
    metrics[1].metric("Records", full.summary.total_records)
    metrics[2].metric("Days", f"{day_bounds.start} to {day_bounds.end}")

    st.subheader("Overview")
    st.line_chart(overview_frame(chart), use_container_width=True)

    chosen_names = [names_by_id[product_id] for product_id in chosen_ids]
    tab_inventory, tab_sales, tab_procurement = st.tabs(["Inventory", "Sales", "Procurement"])
    with tab_inventory:
        st.line_chart(product_metric_frame(chart, chosen_names, "inventory"), use_container_width=True)
    with tab_sales:
        st.bar_chart(product_metric_frame(chart, chosen_names, "sales"), use_container_width=True)
    with tab_procurement:
        st.bar_chart(product_metric_frame(chart, chosen_names, "procurement"), use_container_width=True)

    if frontend_settings.show_raw_payloads:
        with st.expander("Raw per-product rows"):
            st.json(chart.series.per_product)


def _render_manage(data_set_id: int) -> None:
    new_name = st.text_input("New name")
    cols = st.columns(2)
    if cols[0].button("Rename", use_container_width=True):
        try:
            _with_session(
                lambda db: backend["data_sets"].rename(db=db, data_set_id=data_set_id, name=new_name)
            )
        except Exception as exc:  # noqa: BLE001
            st.error(f"Rename failed: {exc}")
        else:
            st.rerun()
    if cols[1].button("Delete dataset", use_container_width=True):
        try:
            _with_session(lambda db: backend["data_sets"].delete(db=db, data_set_id=data_set_id))
        except Exception as exc:  # noqa: BLE001
            st.error(f"Delete failed: {exc}")
        else:
            st.session_state.selected_data_set_id = None
            st.rerun()


def _render_assistant(data_set_id: int) -> None:
    question = st.text_area("Ask about this dataset", placeholder="e.g. Which product sold the most?")
    if st.button("Ask", type="primary"):
        with st.spinner("Thinking…"):
            try:
                st.session_state.assistant_answer = _with_session(
                    lambda db: backend["assistant"].analyze(
                        db=db,
                        data_set_id=data_set_id,
                        question=question,
                    )
                )
            except Exception as exc:  # noqa: BLE001
                st.error(f"Assistant error: {exc}")

    answer = st.session_state.assistant_answer
    if answer is not None:
        st.markdown(answer.answer)
        st.caption(
            f"{answer.data_set_name}: {answer.total_products} products, {answer.total_records} records"
        )


# ── Main content area ──────────────────────────────────────────────────────
if selected is None:
    st.info("Upload a spreadsheet in the sidebar to get started.")
else:
    tab_charts, tab_assistant, tab_manage = st.tabs(["Charts", "Assistant", "Manage"])
    with tab_charts:
        _render_charts(selected)
    with tab_assistant:
        _render_assistant(selected)
    with tab_manage:
        _render_manage(selected)
