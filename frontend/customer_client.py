# frontend/customer_client.py

import logging
from typing import Any, Dict, List, Optional

import requests

from constants import CUSTOMERS_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class CustomerApiError(Exception):
    """A customer API call failed. ``status_code`` is None when the backend could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CustomerApiClient:
    def __init__(self, base_url: str = CUSTOMERS_URL, session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str = "", json_data: Optional[Dict[str, Any]] = None):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=json_data, timeout=self.timeout)
        except requests.exceptions.ConnectionError as err:
            raise CustomerApiError(f"Could not connect to backend at {self.base_url}. Is the server running?") from err
        except requests.exceptions.RequestException as err:
            raise CustomerApiError(f"Request failed: {err}") from err

        if response.status_code not in (200, 201, 204):
            try:
                detail = response.json().get("detail", f"HTTP {response.status_code}")
            except ValueError:
                detail = f"HTTP {response.status_code}: {response.text}"
            logger.warning("%s %s -> %s (%s)", method, url, response.status_code, detail)
            raise CustomerApiError(str(detail), status_code=response.status_code)

        if response.status_code == 204:
            return None
        return response.json()

    # GET - all customers
    def get_all_customers(self) -> List[Dict[str, Any]]:
        return self._request("GET")

    def get_customer_by_id(self, customer_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/{customer_id}")

    def create_customer(self, customer: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", json_data=customer)

    # PUT - replaces name, address, phone and email
    def update_customer(self, customer_id: int, customer: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/{customer_id}", json_data=customer)

    def patch_customer(self, customer_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/{customer_id}", json_data=fields)

    # PATCH - verification status only
    def update_customer_status(self, customer_id: int, status: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/{customer_id}/status", json_data={"status": status})

    def delete_customer(self, customer_id: int) -> None:
        self._request("DELETE", f"/{customer_id}")
