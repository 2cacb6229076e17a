"""Database models and schema for the search log."""

# SQLite schema definitions
SCHEMA_SQL = """
-- Append-only log of searches shown to each client
CREATE TABLE IF NOT EXISTS searches (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ip TEXT,
    city TEXT,
    search_type TEXT,
    result TEXT,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
);

-- History is always read per client, newest first
CREATE INDEX IF NOT EXISTS idx_searches_ip_timestamp ON searches(ip, timestamp);
"""

INSERT_SEARCH_SQL = """
INSERT INTO searches (ip, city, search_type, result)
VALUES (?, ?, ?, ?)
"""

SELECT_BY_IP_SQL = """
SELECT id, ip, city, search_type, result, timestamp
FROM searches
WHERE ip = ?
ORDER BY timestamp DESC, id DESC
"""
