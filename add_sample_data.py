#!/usr/bin/env python3
"""
Quick script to add sample customers for the customer management UI
"""

import os
import random

import requests

# Configuration
API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000") + "/api/customers"

SAMPLE_CUSTOMERS = [
    {"name": "Ann Lee", "address": "1 Main St", "phoneNo": "555-1234", "email": "ann@example.com"},
    {"name": "Bilal Khan", "address": "22 Harbour Rd", "phoneNo": "+44 20 7946 0018", "email": "bilal.khan@example.com"},
    {"name": "Carmen Ortiz", "address": "7 Calle Mayor, Madrid", "phoneNo": "+34 91 123 4567", "email": "carmen@example.org"},
    {"name": "Dev Patel", "address": "48 Ring Road, Pune", "phoneNo": "020-2567-8890", "email": "dev.patel@example.net"},
    {"name": "Eva Novak", "address": "3 Vinohradska, Prague", "phoneNo": "+420 601 234 567", "email": "eva.novak@example.com"},
]

STATUSES = ["Not Verified", "Verified", "Fraud", "Suspicious", "Black Listed"]


def create_sample_customer(customer_data):
    """Create a sample customer"""
    response = requests.post(API_BASE, json=customer_data, timeout=10)
    if response.status_code == 201:
        return response.json()
    print(f"Failed to create customer: {response.status_code} - {response.text}")
    return None


def set_status(customer_id, status):
    response = requests.patch(f"{API_BASE}/{customer_id}/status", json={"status": status}, timeout=10)
    if response.status_code != 200:
        print(f"Failed to set status for customer {customer_id}: {response.status_code}")


def main():
    print("🚀 Adding sample customers...")

    try:
        existing = requests.get(API_BASE, timeout=10).json()
    except requests.exceptions.ConnectionError:
        print(f"❌ Could not reach the API at {API_BASE}")
        return
    known_emails = {c["email"] for c in existing}
    print(f"📊 {len(existing)} customers already present")

    created = 0
    for data in SAMPLE_CUSTOMERS:
        if data["email"] in known_emails:
            continue
        customer = create_sample_customer(data)
        if customer:
            created += 1
            status = random.choice(STATUSES)
            if status != customer["verificationStatus"]:
                set_status(customer["id"], status)
            print(f"✅ Created {customer['name']} (#{customer['id']}) -> {status}")

    print(f"🎉 Done, {created} customers added")


if __name__ == "__main__":
    main()
