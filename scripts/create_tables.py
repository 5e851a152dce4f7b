import logging

from blogadmin.db.base import engine
from blogadmin.main import create_tables

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    try:
        create_tables()
        logger.info(f"Posts table ready on {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        logger.error(f"Table creation failed: {e}", exc_info=True)
    finally:
        engine.dispose()
