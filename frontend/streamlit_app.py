# frontend/streamlit_app.py

import logging

import pandas as pd
import streamlit as st

from constants import BACKEND_API_URL, DEFAULT_STATUS
from customer_client import CustomerApiClient
from customer_state import (
    ERROR,
    LOADING,
    PAGE_SIZE_OPTIONS,
    CustomerScreenState,
    change_status,
    load_customers,
    remove_customer,
    sort_customers,
    status_menu_options,
    submit_customer_form,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

st.set_page_config(layout="wide", page_title="Customer Management System")

STATUS_BADGES = {
    "Not Verified": "⚪",
    "Verified": "🟢",
    "Fraud": "🔴",
    "Suspicious": "🟠",
    "Black Listed": "⚫",
}


# --- Session setup ---
if "customer_screen" not in st.session_state:
    st.session_state.customer_screen = CustomerScreenState()
if "api_client" not in st.session_state:
    st.session_state.api_client = CustomerApiClient()

screen: CustomerScreenState = st.session_state.customer_screen
client: CustomerApiClient = st.session_state.api_client

# First visit of the session fetches the full list once
if screen.phase == LOADING:
    with st.spinner("Loading customers..."):
        load_customers(client, screen)


def show_notices():
    for notice in screen.pop_notices():
        if notice["type"] == "success":
            st.toast(f"✅ {notice['content']}")
        else:
            st.toast(f"❌ {notice['content']}")


def show_customer_form():
    title = "✏️ Edit Customer" if screen.is_editing else "➕ Add New Customer"
    defaults = screen.form_defaults()
    st.subheader(title)
    with st.form("customer_form"):
        name = st.text_input("👤 Name *", value=defaults["name"], placeholder="Enter customer name")
        email = st.text_input("📧 Email *", value=defaults["email"], placeholder="Enter email address")
        phone = st.text_input("📞 Phone Number *", value=defaults["phoneNo"], placeholder="Enter phone number")
        address = st.text_area("📍 Address *", value=defaults["address"], placeholder="Enter customer address", height=90)

        for field_name, message in screen.form_errors.items():
            st.error(f"{field_name}: {message}")

        col_submit, col_cancel = st.columns(2)
        with col_submit:
            submitted = st.form_submit_button(
                "Update Customer" if screen.is_editing else "Add Customer", type="primary", use_container_width=True
            )
        with col_cancel:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        screen.close_form()
        st.rerun()
    if submitted:
        values = {"name": name, "email": email, "phoneNo": phone, "address": address}
        submit_customer_form(client, screen, values)
        st.rerun()


def on_status_selected(customer, status_key):
    new_status = st.session_state.get(status_key)
    # Reset the menu so it shows the placeholder again after the rerun
    st.session_state[status_key] = None
    if new_status:
        change_status(client, screen, customer, new_status)


def show_customer_row(customer):
    customer_id = customer["id"]
    current_status = customer.get("verificationStatus") or DEFAULT_STATUS
    cols = st.columns([0.6, 2, 2.4, 1.6, 3, 1.6, 2.2, 0.8, 0.8])
    cols[0].write(customer_id)
    cols[1].write(customer.get("name", ""))
    cols[2].write(customer.get("email", ""))
    cols[3].write(customer.get("phoneNo", ""))
    cols[4].write(customer.get("address", ""))
    cols[5].write(f"{STATUS_BADGES.get(current_status, '')} {current_status}")

    with cols[6]:
        status_key = f"status_{customer_id}"
        st.selectbox(
            "Change status",
            status_menu_options(current_status),
            index=None,
            placeholder="Change status",
            key=status_key,
            on_change=on_status_selected,
            args=(customer, status_key),
            label_visibility="collapsed",
        )

    with cols[7]:
        if st.button("✏️", key=f"edit_{customer_id}", help="Edit customer"):
            screen.open_edit(customer)
            st.rerun()

    with cols[8]:
        if st.button("🗑️", key=f"delete_{customer_id}", help="Delete customer"):
            st.session_state[f"confirm_delete_customer_{customer_id}"] = True
            st.rerun()

    # Show confirmation if delete was clicked
    if st.session_state.get(f"confirm_delete_customer_{customer_id}", False):
        st.warning(f"⚠️ Are you sure you want to delete customer '{customer.get('name', 'Unknown')}'?")
        col_yes, col_no, _ = st.columns([1, 1, 6])
        with col_yes:
            if st.button("✅ Yes", key=f"confirm_yes_{customer_id}", type="primary"):
                del st.session_state[f"confirm_delete_customer_{customer_id}"]
                remove_customer(client, screen, customer_id)
                st.rerun()
        with col_no:
            if st.button("❌ No", key=f"confirm_no_{customer_id}"):
                del st.session_state[f"confirm_delete_customer_{customer_id}"]
                st.rerun()


def show_customers_page():
    st.header("👥 Customer Management System")
    show_notices()

    col_search, col_sort, col_add, col_refresh = st.columns([4, 2, 1.2, 1.2])
    with col_search:
        screen.search = st.text_input(
            "Search",
            key="customer_search",
            placeholder="Search customers by name, email, phone, or address",
            label_visibility="collapsed",
        )
    with col_sort:
        sort_choice = st.selectbox(
            "Sort by", ["ID", "Name (A-Z)", "Name (Z-A)"], label_visibility="collapsed"
        )
    with col_add:
        if st.button("➕ Add Customer", type="primary", use_container_width=True):
            screen.open_create()
            st.rerun()
    with col_refresh:
        if st.button("🔄 Refresh", use_container_width=True):
            load_customers(client, screen)
            st.rerun()

    if screen.form_open:
        show_customer_form()
        st.markdown("---")

    if screen.phase == ERROR:
        st.error(f"❌ Failed to load customers from {BACKEND_API_URL}: {screen.error}")
        return

    customers = screen.visible_customers()
    if sort_choice == "ID":
        customers = sort_customers(customers, "id")
    else:
        customers = sort_customers(customers, "name", descending=sort_choice == "Name (Z-A)")

    if not customers:
        st.info("📭 No customers found.")
        return

    page = screen.current_page(customers)
    col_total, col_size, col_page = st.columns([6, 1.2, 1.2])
    with col_total:
        st.caption(f"{page['start']}-{page['end']} of {page['total']} customers")
    with col_size:
        page_size = st.selectbox(
            "Rows per page", PAGE_SIZE_OPTIONS, index=PAGE_SIZE_OPTIONS.index(screen.page_size),
            format_func=lambda n: f"{n} / page", label_visibility="collapsed",
        )
    with col_page:
        page_number = st.selectbox(
            "Page", list(range(1, page["page_count"] + 1)), index=page["page"] - 1,
            format_func=lambda n: f"Page {n} of {page['page_count']}", label_visibility="collapsed",
        )
    if page_size != screen.page_size:
        screen.page_size = page_size
        screen.page = 1
        st.rerun()
    if page_number != screen.page:
        screen.page = page_number
        st.rerun()

    header = st.columns([0.6, 2, 2.4, 1.6, 3, 1.6, 2.2, 0.8, 0.8])
    for col, label in zip(header, ["ID", "Name", "Email", "Phone No.", "Address", "Status", "", "", ""]):
        col.markdown(f"**{label}**")
    for customer in page["items"]:
        show_customer_row(customer)

    # Sortable overview table
    with st.expander("📊 Customer Summary Table"):
        df = pd.DataFrame(customers)
        st.dataframe(df, use_container_width=True, hide_index=True)


show_customers_page()
