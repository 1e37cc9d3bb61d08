"""
One-off script: ensure the `applications` table exists.
Usage:
  python scripts/init_db.py
The script reads DATABASE_URL from app.core.config.settings and creates the table if missing.
"""
import sys
from sqlalchemy import create_engine, inspect
from app.core.config import settings
from app.database.database import Database


def main(database_url=None):
    url = database_url or settings.database_url

    # Check before creating so we can report what happened
    engine = create_engine(url)
    try:
        existed = "applications" in inspect(engine).get_table_names()
    finally:
        engine.dispose()

    Database(url).open().close()
    if existed:
        print("Table 'applications' already exists")
    else:
        print("Created table 'applications'")
    return existed

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        print('Error:', e)
        sys.exit(1)
    print('Done')
