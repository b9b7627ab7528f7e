"""Application settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    Riot development keys allow 20 requests / 1 s and 100 requests / 120 s
    for the whole application. The application-wide limiter stays slightly
    below both; endpoint limiters only ever tighten it.
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Rate limits (per 1 second / per 2 minutes) ─────────────────────────
    RATE_LIMIT_PER_1_SEC:           int = _int('RATE_LIMIT_PER_1_SEC', 18)
    RATE_LIMIT_PER_2_MIN:           int = _int('RATE_LIMIT_PER_2_MIN', 90)

    MATCH_RATE_LIMIT_PER_1_SEC:     int = _int('MATCH_RATE_LIMIT_PER_1_SEC', 10)
    MATCH_RATE_LIMIT_PER_2_MIN:     int = _int('MATCH_RATE_LIMIT_PER_2_MIN', 80)

    LEAGUE_RATE_LIMIT_PER_1_SEC:    int = _int('LEAGUE_RATE_LIMIT_PER_1_SEC', 15)
    LEAGUE_RATE_LIMIT_PER_2_MIN:    int = _int('LEAGUE_RATE_LIMIT_PER_2_MIN', 75)

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = BASE_DIR / 'data'
    DB_DIR:   Path = DATA_DIR / 'db'
    LOG_DIR:  Path = DATA_DIR / 'logs'
    DB_PATH:  Path = Path(os.getenv('DB_PATH', str(DB_DIR / 'riftsync.sqlite')))

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int   = _int('REQUEST_TIMEOUT', 30)
    MAX_RETRIES:     int   = _int('MAX_RETRIES', 3)
    RETRY_BACKOFF:   float = _float('RETRY_BACKOFF', 2.0)

    # ── Sync ───────────────────────────────────────────────────────────────
    DEFAULT_REGION: str = os.getenv('DEFAULT_REGION', 'euw1')

    # Match IDs fetched per job; tens, not hundreds, to stay inside the 2-min window.
    MATCHES_PER_SYNC: int = _int('MATCHES_PER_SYNC', 10)

    SYNC_IDLE_INTERVAL:  float = _float('SYNC_IDLE_INTERVAL', 30.0)
    SYNC_JOB_INTERVAL:   float = _float('SYNC_JOB_INTERVAL', 2.0)
    SYNC_ERROR_BACKOFF:  float = _float('SYNC_ERROR_BACKOFF', 10.0)

    # PROCESSING jobs older than this are failed on worker start. 0 disables.
    SYNC_STALE_JOB_MINUTES: int = _int('SYNC_STALE_JOB_MINUTES', 30)

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ValueError("RIOT_API_KEY must be set in config/.env")

    @classmethod
    def create_directories(cls) -> None:
        cls.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
