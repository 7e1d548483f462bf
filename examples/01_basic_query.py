"""
Example 01: Basic Query Execution

Runs statements against an Aurora cluster through the RDS Data API and maps
the rows onto plain Python classes.

Set DATA_API_RESOURCE_ARN, DATA_API_SECRET_ARN and DATA_API_DATABASE (plus the
usual AWS credentials and region) before running.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from dataapi_client import DataApiClient


@dataclass
class Order:
    id: int
    customer: str
    total: Decimal
    created_at: datetime


class OrderSummary:
    customer = ""
    orders = 0

    def set_customer(self, value: str) -> None:
        self.customer = value.title()


def main():
    client = DataApiClient.from_config()

    print("=== Basic Query Execution ===\n")

    client.for_sql(
        "CREATE TABLE IF NOT EXISTS orders ("
        " id INTEGER PRIMARY KEY, customer TEXT, total NUMERIC(10, 2), created_at TIMESTAMP)"
    ).execute()

    # Batch insert: more than one parameter set goes through BatchExecuteStatement
    now = datetime.now()
    client.for_sql(
        "INSERT INTO orders VALUES (:id, :customer, :total, :created_at)"
    ).with_param_sets(
        Order(1, "alice", Decimal("12.50"), now),
        Order(2, "bob", Decimal("7.25"), now),
        Order(3, "alice", Decimal("3.00"), now),
    ).execute()

    # Positional parameters are rewritten to :1, :2, ...
    order = client.for_sql("SELECT * FROM orders WHERE id = ?", 1).execute().map_to_single(Order)
    print(f"map_to_single result: {order}\n")

    # No matching constructor: the instance is filled through setters and fields
    summaries = client.for_sql(
        "SELECT customer, COUNT(*) AS orders FROM orders GROUP BY customer ORDER BY customer"
    ).execute().map_to_list(OrderSummary)
    print(f"map_to_list result ({len(summaries)} rows):")
    for summary in summaries:
        print(f"  - {summary.customer}: {summary.orders}")
    print()

    count = client.for_sql("SELECT COUNT(*) FROM orders").execute().single_value(int)
    print(f"single_value result: {count} orders\n")

    client.for_sql("DROP TABLE orders").execute()


if __name__ == "__main__":
    main()
