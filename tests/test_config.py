from sqlalchemy.engine import make_url

from app.config import Settings


def test_default_database_url_uses_declared_driver():
    url = make_url(Settings.model_fields["DATABASE_URL"].default)

    assert url.get_backend_name() == "postgresql"
    assert url.get_driver_name() == "psycopg2"
