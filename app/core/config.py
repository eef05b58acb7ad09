import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PORT = int(os.getenv("PORT", "3000"))

# PostgreSQL database configuration
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "inventory_db")

SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

POSTGRES_DRIVER = "postgresql+psycopg2"

# Only the deployed frontend may call the API
FRONTEND_ORIGIN = os.getenv(
    "FRONTEND_ORIGIN",
    "https://inventory-management-frontend-ph25.netlify.app",
)


def get_database_url() -> str:
    """
    Resolve the SQLAlchemy database URL.
    DATABASE_URL wins when set, otherwise it is built from the DB_* variables.
    PostgreSQL URLs always name the psycopg2 driver.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        # Hosting providers often hand out postgres://
        for scheme in ("postgres://", "postgresql://"):
            if url.startswith(scheme):
                url = url.replace(scheme, f"{POSTGRES_DRIVER}://", 1)
        return url
    return f"{POSTGRES_DRIVER}://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
