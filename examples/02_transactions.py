"""
Example 02: Transactions

Runs several statements in one Data API transaction. The transaction commits
when the block ends normally and rolls back when it raises.
"""

from dataapi_client import DataApiClient


def main():
    client = DataApiClient.from_config()

    client.for_sql("CREATE TABLE IF NOT EXISTS accounts (id INTEGER PRIMARY KEY, balance INTEGER)").execute()
    client.for_sql("INSERT INTO accounts VALUES (1, 100), (2, 0)").execute()

    print("=== Transactions ===\n")

    # Successful transfer: committed on exit
    with client.transaction() as tx:
        tx.for_sql("UPDATE accounts SET balance = balance - ? WHERE id = ?", 30, 1).execute()
        tx.for_sql("UPDATE accounts SET balance = balance + ? WHERE id = ?", 30, 2).execute()
    print(f"Transaction {tx.transaction_id} {tx.state}")

    # Failed transfer: rolled back on exit
    try:
        with client.transaction() as tx:
            tx.for_sql("UPDATE accounts SET balance = balance - ? WHERE id = ?", 500, 1).execute()
            raise ValueError("insufficient funds")
    except ValueError as e:
        print(f"Transaction {tx.transaction_id} {tx.state}: {e}")

    balances = client.for_sql("SELECT id, balance FROM accounts ORDER BY id").execute().to_dicts()
    print(f"\nBalances: {balances}")

    client.for_sql("DROP TABLE accounts").execute()


if __name__ == "__main__":
    main()
