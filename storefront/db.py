
import os, json, pathlib
import duckdb
import logging

logger = logging.getLogger("storefront.db")

DB_CONN = None

def get_conn():
    global DB_CONN
    if DB_CONN is not None:
        return DB_CONN

    path = os.getenv("DUCKDB_PATH", "local.duckdb")
    DB_CONN = duckdb.connect(path)
    return DB_CONN

def close_conn():
    global DB_CONN
    if DB_CONN is not None:
        DB_CONN.close()
        DB_CONN = None

def init_db():
    conn = get_conn()
    conn.execute("""
        CREATE TABLE IF NOT EXISTS products (
            id TEXT PRIMARY KEY,
            name TEXT,
            description TEXT,
            price BIGINT,
            currency TEXT,
            image TEXT,
            sku TEXT
        );
    """)

    # Seed products from JSON if empty
    count = conn.execute("SELECT count(*) FROM products").fetchone()[0]
    if count == 0:
        path = pathlib.Path(__file__).parent / "data" / "products.json"
        with open(path, "r", encoding="utf-8") as f:
            feed = json.load(f)
        for p in feed.get("products", []):
            conn.execute(
                "INSERT INTO products VALUES (?, ?, ?, ?, ?, ?, ?)",
                [p["id"], p["name"], p.get("description", ""), int(p["price"]), p.get("currency", "usd"),
                 p.get("image"), p.get("sku")]
            )
        logger.info("Seeded %d products from %s", len(feed.get("products", [])), path.name)
