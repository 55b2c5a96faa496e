import sqlite3
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Union

from rewards_program.domain.models import Customer, Transaction

DB_PATH = Path("rewards.db")


class RewardsDB:
    def __init__(self, db_path: Union[str, Path] = DB_PATH):
        # FastAPI runs sync routes in a worker thread, not the one that opened us
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.execute("PRAGMA foreign_keys = ON")
        self._create_tables()

    def _create_tables(self):
        cursor = self.conn.cursor()

        # Create customers table
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS customers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL
            )
        """
        )

        # Amounts are kept as decimal strings, dates as YYYY-MM-DD
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                customer_id INTEGER NOT NULL
                    REFERENCES customers(id) ON DELETE CASCADE,
                amount TEXT NOT NULL,
                date TEXT NOT NULL
            )
        """
        )

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_transactions_customer_date
            ON transactions (customer_id, date)
        """
        )

        self.conn.commit()

    def close(self):
        self.conn.close()

    def add_customer(self, name: str) -> Customer:
        cursor = self.conn.cursor()
        cursor.execute("INSERT INTO customers (name) VALUES (?)", (name,))
        self.conn.commit()
        return Customer(id=cursor.lastrowid, name=name)

    # Returns None when no customer has this id
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT id, name FROM customers WHERE id = ?", (customer_id,))
        row = cursor.fetchone()
        if row is None:
            return None
        return Customer(id=row[0], name=row[1])

    def add_transaction(self, customer_id: int, amount: Decimal, date: date) -> Transaction:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO transactions (customer_id, amount, date)
            VALUES (?, ?, ?)
            """,
            (customer_id, str(amount), date.isoformat()),
        )
        self.conn.commit()
        return Transaction(id=cursor.lastrowid, customer_id=customer_id, amount=amount, date=date)

    def get_transactions_by_customer(self, customer_id: int) -> List[Transaction]:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT id, customer_id, amount, date
            FROM transactions
            WHERE customer_id = ?
            ORDER BY date, id
            """,
            (customer_id,),
        )
        return [_row_to_transaction(r) for r in cursor.fetchall()]

    # Both ends of the range are inclusive
    def get_transactions_by_customer_between(
        self,
        customer_id: int,
        start_date: date,
        end_date: date,
    ) -> List[Transaction]:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT id, customer_id, amount, date
            FROM transactions
            WHERE customer_id = ?
            AND date BETWEEN ? AND ?
            ORDER BY date, id
            """,
            (customer_id, start_date.isoformat(), end_date.isoformat()),
        )
        return [_row_to_transaction(r) for r in cursor.fetchall()]


def _row_to_transaction(row) -> Transaction:
    return Transaction(
        id=row[0],
        customer_id=row[1],
        amount=Decimal(row[2]),
        date=date.fromisoformat(row[3]),
    )
