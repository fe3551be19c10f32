# frontend/customer_state.py
"""UI-side logic for the Customers page, kept free of Streamlit so it can be tested directly."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from constants import VERIFICATION_STATUS_OPTIONS
from customer_client import CustomerApiError

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"^[0-9+\-\s]+$")
SEARCH_FIELDS = ("name", "email", "phoneNo", "address")
FORM_FIELDS = ("name", "email", "phoneNo", "address")

PAGE_SIZE_OPTIONS = (10, 20, 50, 100)

LOADING = "loading"
LOADED = "loaded"
ERROR = "error"


def status_menu_options(current: Optional[str]) -> List[str]:
    """Statuses a record can be moved to: every status except the one it holds."""
    return [s for s in VERIFICATION_STATUS_OPTIONS if s != current]


def filter_customers(customers: List[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    if not term or not term.strip():
        return list(customers)
    needle = term.strip().lower()
    return [
        c for c in customers
        if any(needle in str(c.get(f) or "").lower() for f in SEARCH_FIELDS)
    ]


def sort_customers(customers: List[Dict[str, Any]], key: str = "name", descending: bool = False) -> List[Dict[str, Any]]:
    if key == "id":
        return sorted(customers, key=lambda c: c.get("id") or 0, reverse=descending)
    return sorted(customers, key=lambda c: str(c.get(key) or "").lower(), reverse=descending)


def paginate_customers(customers: List[Dict[str, Any]], page: int, page_size: int) -> Dict[str, Any]:
    """Slice one page out of the locally held list.

    ``page`` is 1-based and clamped into range, so shrinking the list (a search,
    a delete) never leaves the table on a page that no longer exists.
    ``start``/``end`` are 1-based positions for the "x-y of N" caption, 0 when empty.
    """
    total = len(customers)
    page_size = max(1, page_size)
    page_count = max(1, -(-total // page_size))
    page = min(max(1, page), page_count)
    offset = (page - 1) * page_size
    items = customers[offset:offset + page_size]
    return {
        "items": items,
        "page": page,
        "page_count": page_count,
        "start": offset + 1 if items else 0,
        "end": offset + len(items),
        "total": total,
    }


def validate_customer_form(values: Dict[str, Any]) -> Dict[str, str]:
    """Field-level checks run before anything is sent. Returns {field: message}; empty means valid."""
    errors = {}
    name = (values.get("name") or "").strip()
    email = (values.get("email") or "").strip()
    phone = (values.get("phoneNo") or "").strip()
    address = (values.get("address") or "").strip()

    if not name:
        errors["name"] = "Please enter customer name!"
    elif len(name) < 2:
        errors["name"] = "Name must be at least 2 characters long!"

    if not email:
        errors["email"] = "Please enter email address!"
    else:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            errors["email"] = "Please enter a valid email address!"

    if not phone:
        errors["phoneNo"] = "Please enter phone number!"
    elif not PHONE_RE.match(phone) or not any(ch.isdigit() for ch in phone):
        errors["phoneNo"] = "Please enter a valid phone number!"

    if not address:
        errors["address"] = "Please enter address!"
    return errors


@dataclass
class CustomerScreenState:
    """State of the Customers page between Streamlit reruns.

    ``phase`` moves loading -> loaded | error on every fetch. ``editing``
    decides what the shared form does: None creates, a record updates.
    """
    phase: str = LOADING
    customers: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    search: str = ""
    form_open: bool = False
    editing: Optional[Dict[str, Any]] = None
    form_errors: Dict[str, str] = field(default_factory=dict)
    notices: List[Dict[str, str]] = field(default_factory=list)
    page: int = 1
    page_size: int = PAGE_SIZE_OPTIONS[0]

    def start_loading(self) -> None:
        self.phase = LOADING
        self.error = None

    def finish_loading(self, customers: List[Dict[str, Any]]) -> None:
        self.phase = LOADED
        self.customers = list(customers)
        self.error = None

    def fail(self, message: str) -> None:
        self.phase = ERROR
        self.error = message

    def visible_customers(self) -> List[Dict[str, Any]]:
        return filter_customers(self.customers, self.search)

    def open_create(self) -> None:
        self.editing = None
        self.form_errors = {}
        self.form_open = True

    def open_edit(self, customer: Dict[str, Any]) -> None:
        self.editing = dict(customer)
        self.form_errors = {}
        self.form_open = True

    def close_form(self) -> None:
        self.form_open = False
        self.editing = None
        self.form_errors = {}

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def form_defaults(self) -> Dict[str, str]:
        source = self.editing or {}
        return {f: source.get(f) or "" for f in FORM_FIELDS}

    def notify(self, kind: str, text: str) -> None:
        self.notices.append({"type": kind, "content": text})

    def pop_notices(self) -> List[Dict[str, str]]:
        notices, self.notices = self.notices, []
        return notices

    def current_page(self, customers: List[Dict[str, Any]]) -> Dict[str, Any]:
        page = paginate_customers(customers, self.page, self.page_size)
        self.page = page["page"]
        return page


def load_customers(client, state: CustomerScreenState) -> None:
    state.start_loading()
    try:
        state.finish_loading(client.get_all_customers())
        state.notify("success", "Customers loaded successfully")
    except CustomerApiError as err:
        logger.error("Error fetching customers: %s", err)
        state.fail(str(err))
        state.notify("error", "Failed to load customers")


def submit_customer_form(client, state: CustomerScreenState, values: Dict[str, Any]) -> bool:
    """Validate and send the shared add/edit form. Returns True when the record was saved."""
    errors = validate_customer_form(values)
    if errors:
        state.form_errors = errors
        return False

    payload = {f: (values.get(f) or "").strip() for f in FORM_FIELDS}
    editing = state.editing
    try:
        if editing is not None:
            client.update_customer(editing["id"], payload)
            state.notify("success", "Customer updated successfully")
        else:
            client.create_customer(payload)
            state.notify("success", "Customer added successfully")
    except CustomerApiError as err:
        logger.error("Error saving customer: %s", err)
        state.notify("error", f"Failed to {'update' if editing is not None else 'add'} customer")
        return False

    state.close_form()
    load_customers(client, state)
    return True


def change_status(client, state: CustomerScreenState, customer: Dict[str, Any], status: str) -> bool:
    try:
        client.update_customer_status(customer["id"], status)
    except CustomerApiError as err:
        logger.error("Error updating status for customer %s: %s", customer.get("id"), err)
        state.notify("error", "Failed to update customer status")
        return False
    state.notify("success", f"Status changed to {status}")
    load_customers(client, state)
    return True


def remove_customer(client, state: CustomerScreenState, customer_id: int) -> bool:
    try:
        client.delete_customer(customer_id)
    except CustomerApiError as err:
        logger.error("Error deleting customer %s: %s", customer_id, err)
        state.notify("error", "Failed to delete customer")
        return False
    state.notify("success", "Customer deleted successfully")
    load_customers(client, state)
    return True
