import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import mysql.connector

from customer_mgmt.database import get_db_connection  # Use centralized database configuration
from customer_mgmt.models.customer import Customer

logger = logging.getLogger(__name__)

SELECT_COLUMNS = "SELECT id, name, address, phone_no, email, verification_status FROM customer"


class CustomerRepository(ABC):
    """Persistence contract for customer rows."""

    @abstractmethod
    def find_all(self) -> List[Customer]:
        pass

    @abstractmethod
    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    def save(self, customer: Customer) -> Optional[Customer]:
        """Insert when ``customer.id`` is None, otherwise overwrite the row with that id.

        Returns None when the row to overwrite no longer exists.
        """

    @abstractmethod
    def exists_by_id(self, customer_id: int) -> bool:
        pass

    @abstractmethod
    def delete_by_id(self, customer_id: int) -> None:
        pass


def _row_to_customer(row: Dict[str, Any]) -> Customer:
    return Customer(
        id=row["id"],
        name=row["name"],
        address=row["address"],
        phone_no=row["phone_no"],
        email=row["email"],
        verification_status=row.get("verification_status"),
    )


class MySQLCustomerRepository(CustomerRepository):
    def _get_db_connection(self):
        """Get database connection using secure configuration"""
        return get_db_connection()

    def find_all(self) -> List[Customer]:
        conn = self._get_db_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(f"{SELECT_COLUMNS} ORDER BY id")
            return [_row_to_customer(row) for row in cursor.fetchall()]
        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        conn = self._get_db_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(f"{SELECT_COLUMNS} WHERE id = %s", (customer_id,))
            row = cursor.fetchone()
            return _row_to_customer(row) if row else None
        finally:
            cursor.close()
            conn.close()

    def save(self, customer: Customer) -> Optional[Customer]:
        conn = self._get_db_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            try:
                if customer.id is None:
                    sql = "INSERT INTO customer (name, address, phone_no, email, verification_status) VALUES (%s, %s, %s, %s, %s)"
                    values = (customer.name, customer.address, customer.phone_no, customer.email,
                              customer.verification_status.value)
                    cursor.execute(sql, values)
                    customer_id = cursor.lastrowid
                else:
                    sql = "UPDATE customer SET name = %s, address = %s, phone_no = %s, email = %s, verification_status = %s WHERE id = %s"
                    values = (customer.name, customer.address, customer.phone_no, customer.email,
                              customer.verification_status.value, customer.id)
                    cursor.execute(sql, values)
                    customer_id = customer.id
                conn.commit()
            except mysql.connector.Error as err:
                logger.warning("Rolling back customer write: %s", err)
                conn.rollback()
                raise

            # Re-read so the caller sees exactly what was stored. An UPDATE that
            # matched nothing (row deleted meanwhile) finds no row here.
            cursor.execute(f"{SELECT_COLUMNS} WHERE id = %s", (customer_id,))
            row = cursor.fetchone()
            if row is None:
                logger.info("Customer %s no longer exists, nothing saved", customer_id)
                return None
            return _row_to_customer(row)
        finally:
            cursor.close()
            conn.close()

    def exists_by_id(self, customer_id: int) -> bool:
        conn = self._get_db_connection()
        cursor = conn.cursor()
        try:
            cursor.execute("SELECT 1 FROM customer WHERE id = %s", (customer_id,))
            return cursor.fetchone() is not None
        finally:
            cursor.close()
            conn.close()

    def delete_by_id(self, customer_id: int) -> None:
        conn = self._get_db_connection()
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM customer WHERE id = %s", (customer_id,))
            conn.commit()
        except mysql.connector.Error as err:
            logger.warning("Rolling back customer write: %s", err)
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()


class InMemoryCustomerRepository(CustomerRepository):
    """Process-local store with the same contract, for development runs and tests."""

    def __init__(self):
        self._rows: Dict[int, Customer] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_all(self) -> List[Customer]:
        with self._lock:
            return [row.model_copy() for _, row in sorted(self._rows.items())]

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        with self._lock:
            row = self._rows.get(customer_id)
            return row.model_copy() if row else None

    def save(self, customer: Customer) -> Optional[Customer]:
        with self._lock:
            if customer.id is None:
                # Ids are never handed out twice, even after a delete
                stored = customer.model_copy(update={"id": self._next_id})
                self._next_id += 1
            elif customer.id in self._rows:
                stored = customer.model_copy()
            else:
                return None
            self._rows[stored.id] = stored
            return stored.model_copy()

    def exists_by_id(self, customer_id: int) -> bool:
        with self._lock:
            return customer_id in self._rows

    def delete_by_id(self, customer_id: int) -> None:
        with self._lock:
            self._rows.pop(customer_id, None)
