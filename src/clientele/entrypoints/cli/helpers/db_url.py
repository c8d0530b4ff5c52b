"""Render database URLs safely for CLI output.

Examples:
    ```bash
    >>> sanitize_url("postgresql+psycopg://clientele:s3cr3t@db:5432/customers")
    'postgresql+psycopg://clientele:***@db:5432/customers'
    >>> sanitize_url("sqlite+pysqlite:///customers.db")
    'sqlite+pysqlite:///customers.db'
    ```

Only the password component is redacted; secrets placed in query parameters
are shown as-is.
"""

from sqlalchemy.engine import make_url


def sanitize_url(url: str) -> str:
    """Return `url` with its password replaced by ``***``."""
    return make_url(url).render_as_string(hide_password=True)
