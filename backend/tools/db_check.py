"""
Dump the state of a local SQLite shop database.

    python tools/db_check.py [dev.db] [ORDER_ID]
"""
import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
ORDER_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Products ===")
cur.execute("SELECT id, name, price_cents, stock, category FROM products ORDER BY id")
for r in cur.fetchall():
    print(r)

print("\n=== Carts ===")
cur.execute(
    "SELECT c.user_id, c.total_cents, COUNT(i.id) FROM carts c "
    "LEFT JOIN cart_items i ON i.cart_id = c.id GROUP BY c.id ORDER BY c.id"
)
for r in cur.fetchall():
    print({"user_id": r[0], "total_cents": r[1], "lines": r[2]})

print("\n=== Recent Orders ===")
if ORDER_ID:
    cur.execute(
        "SELECT id, order_id, status, total_cents, customer_email, created_at FROM orders WHERE order_id=?",
        (ORDER_ID,),
    )
else:
    cur.execute(
        "SELECT id, order_id, status, total_cents, customer_email, created_at FROM orders ORDER BY created_at DESC LIMIT 20"
    )
orders = cur.fetchall()
for r in orders:
    print(r)

if ORDER_ID and orders:
    print(f"\n=== Lines for {ORDER_ID} ===")
    cur.execute(
        "SELECT product_id, name, quantity, price_cents FROM order_lines WHERE order_id=? ORDER BY id",
        (orders[0][0],),
    )
    for r in cur.fetchall():
        print(r)

conn.close()
