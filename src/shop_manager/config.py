import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import dotenv_values

from .logging import get_logger
from .paths import expand_abs, find_project_root, var_dir
from .store.constants import DEFAULT_DB_FILENAME, DEFAULT_DB_FOLDER

log = get_logger("config")

DEFAULT_SMTP_HOST = "localhost"
DEFAULT_SMTP_PORT = 25
DEFAULT_SMTP_SENDER = "no-reply@localhost"
DEFAULT_SMTP_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ShopConfig:
    db_path: str
    output_dir: str
    smtp_host: str
    smtp_port: int
    smtp_user: Optional[str]
    smtp_password: Optional[str]
    smtp_sender: str
    smtp_starttls: bool
    smtp_timeout: float
    email_enabled: bool


def _find_upwards(start_dir: str, filename: str) -> Optional[str]:
    """Return first matching file found when walking up from start_dir.

    Running the shell from a subdirectory still finds the repository-level `.env`.
    """
    d = os.path.abspath(start_dir or ".")
    while True:
        candidate = os.path.join(d, filename)
        if os.path.isfile(candidate):
            return candidate
        parent = os.path.dirname(d)
        if parent == d:
            return None
        d = parent


def read_dotenv(dotenv_dir: str) -> Dict[str, str]:
    """Return key/value pairs from the nearest `.env`; the environment is not mutated."""
    path = _find_upwards(dotenv_dir, ".env")
    if not path:
        log.debug(f"No .env found starting from: {os.path.abspath(dotenv_dir)}")
        return {}
    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    log.debug(f"Loaded {len(values)} key(s) from .env at {path}")
    return values


def _pick(key: str, env: Dict[str, str], override: Optional[object] = None) -> Optional[str]:
    if override is not None:
        return str(override).strip()
    v = os.environ.get(key)
    if v is not None:
        return v.strip()
    v = env.get(key)
    return v.strip() if v is not None else None


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.lower() in _TRUTHY


def build_config(args=None, *, script_dir: Optional[str] = None) -> ShopConfig:
    """Create a ShopConfig from CLI args > environment > .env > defaults.

    Recognized keys: SHOP_DB_PATH, SHOP_OUTPUT_DIR, SHOP_SMTP_HOST, SHOP_SMTP_PORT,
    SHOP_SMTP_USER, SHOP_SMTP_PASSWORD, SHOP_SMTP_SENDER, SHOP_SMTP_STARTTLS,
    SHOP_SMTP_TIMEOUT, SHOP_EMAIL_ENABLED.
    """
    script_dir = script_dir or os.getcwd()
    env = read_dotenv(script_dir)

    db_path = _pick("SHOP_DB_PATH", env, getattr(args, "db_path", None))
    if not db_path:
        repo_root = find_project_root(script_dir)
        db_path = os.path.join(var_dir(repo_root), DEFAULT_DB_FOLDER, DEFAULT_DB_FILENAME)

    output_dir = _pick("SHOP_OUTPUT_DIR", env, getattr(args, "output_dir", None)) or script_dir

    port_raw = _pick("SHOP_SMTP_PORT", env, getattr(args, "smtp_port", None))
    timeout_raw = _pick("SHOP_SMTP_TIMEOUT", env)
    try:
        smtp_port = int(port_raw) if port_raw else DEFAULT_SMTP_PORT
        smtp_timeout = float(timeout_raw) if timeout_raw else DEFAULT_SMTP_TIMEOUT
    except ValueError as exc:
        log.error(f"Invalid SMTP port/timeout setting: {exc}")
        raise SystemExit(1)

    smtp_host = _pick("SHOP_SMTP_HOST", env, getattr(args, "smtp_host", None))
    if smtp_host is None:
        smtp_host = DEFAULT_SMTP_HOST
    email_enabled = _as_bool(_pick("SHOP_EMAIL_ENABLED", env), True) and bool(smtp_host)
    if getattr(args, "no_email", False):
        email_enabled = False

    config = ShopConfig(
        db_path=expand_abs(db_path),
        output_dir=expand_abs(output_dir),
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        smtp_user=_pick("SHOP_SMTP_USER", env, getattr(args, "smtp_user", None)) or None,
        smtp_password=_pick("SHOP_SMTP_PASSWORD", env, getattr(args, "smtp_password", None)) or None,
        smtp_sender=_pick("SHOP_SMTP_SENDER", env, getattr(args, "smtp_sender", None)) or DEFAULT_SMTP_SENDER,
        smtp_starttls=_as_bool(_pick("SHOP_SMTP_STARTTLS", env), False),
        smtp_timeout=smtp_timeout,
        email_enabled=email_enabled,
    )

    log.info("Shop configuration prepared")
    log.info(f"Database path      : {config.db_path}")
    log.info(f"Output directory   : {config.output_dir}")
    log.info(f"SMTP relay         : {config.smtp_host}:{config.smtp_port} (STARTTLS={config.smtp_starttls})")
    log.info(f"SMTP user          : {config.smtp_user or '-'}")
    log.info(f"SMTP password      : {'***' if config.smtp_password else '-'}")
    log.info(f"Email enabled      : {config.email_enabled}")
    return config
