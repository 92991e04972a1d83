import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[2]

# Both keys must be present in the env file before the app may run
REQUIRED_ENV_VARS = ("SUPABASE_URL", "SUPABASE_ANON_KEY")


@dataclass(frozen=True)
class Settings:
    database_url: str
    supabase_url: str
    supabase_key: str
    public_dir: Path
    log_level: str = "INFO"
    login_path: str = "/login"


@lru_cache
def get_settings() -> Settings:
    """
    Reads configuration from the process environment, after loading `.env.local`
    and `.env` from the working directory (existing variables win).
    """
    load_dotenv(".env.local")
    load_dotenv()

    default_db = f"sqlite:///{(REPO_ROOT / 'preppal.db').as_posix()}"
    return Settings(
        database_url=os.getenv("DATABASE_URL", default_db),
        supabase_url=os.getenv("SUPABASE_URL", "").rstrip("/"),
        supabase_key=os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY", ""),
        public_dir=Path(os.getenv("PUBLIC_DIR", str(REPO_ROOT / "public"))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
