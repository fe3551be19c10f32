# frontend/constants.py
import os

from dotenv import load_dotenv

load_dotenv()

# FastAPI backend URL for API calls
BACKEND_API_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
CUSTOMERS_URL = f"{BACKEND_API_URL}/api/customers"

# Seconds to wait on the backend before giving up on a request
REQUEST_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

# Same order as the backend enumeration
VERIFICATION_STATUS_OPTIONS = (
    "Not Verified",
    "Verified",
    "Fraud",
    "Suspicious",
    "Black Listed",
)
DEFAULT_STATUS = VERIFICATION_STATUS_OPTIONS[0]
