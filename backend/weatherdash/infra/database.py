from functools import lru_cache

from sqlalchemy import create_engine

from weatherdash.infra.db.tables import metadata


@lru_cache(maxsize=4)
def get_engine(database_url: str):
    if not database_url:
        raise RuntimeError("database_url is required")
    engine = create_engine(database_url, future=True)
    metadata.create_all(engine)
    return engine
