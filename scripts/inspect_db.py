import os
import sqlite3
import sys

# Resolve DB path relative to repo root unless one is given
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from core.config import DB_PATH  # noqa: E402

DB = sys.argv[1] if len(sys.argv) > 1 else DB_PATH
print('DB:', DB, 'exists:', os.path.exists(DB))
if not os.path.exists(DB):
    sys.exit(1)

con = sqlite3.connect(DB)
cur = con.cursor()
for table in ('patients', 'prescriptions', 'prescription_items', 'certificates', 'inventory', 'templates', 'settings'):
    try:
        cur.execute(f"SELECT COUNT(*) FROM {table}")
        print(f'{table}: {cur.fetchone()[0]} rows')
    except sqlite3.OperationalError as e:
        print(f'{table}: {e}')

cur.execute("PRAGMA table_info('patients')")
print('patients cols:', [r[1] for r in cur.fetchall()])

print('latest visits:')
cur.execute(
    """
    SELECT 'RX', id, patient_id, date, diagnosis FROM prescriptions
    UNION ALL
    SELECT 'CERT', id, patient_id, created_at, diagnosis FROM certificates
    ORDER BY 4 DESC LIMIT 10
    """
)
for r in cur.fetchall():
    print(r)
con.close()
