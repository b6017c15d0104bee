import json
import os
from pathlib import Path
from typing import Any

_CONFIG_ENV_KEYS = ("FLAUNCH_CONFIG_PATH", "FLAUNCH_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"

DEFAULT_POLL_INTERVAL_MS = 5_000
# Blocks per eth_getLogs call; watcher.max_block_range = 0 disables chunking.
DEFAULT_MAX_BLOCK_RANGE = 2_000


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except Exception:
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def set_rpc_urls(rpc_urls):
    CONFIG["rpc_urls"] = rpc_urls


def get_rpc_urls() -> dict[str, Any]:
    return CONFIG.get("rpc_urls", {})


def _watcher_config() -> dict[str, Any]:
    watcher = CONFIG.get("watcher", {})
    return watcher if isinstance(watcher, dict) else {}


def get_poll_interval_ms() -> int:
    value = _watcher_config().get("poll_interval_ms")
    if value is None:
        value = os.environ.get("FLAUNCH_POLL_INTERVAL_MS")
    try:
        parsed = int(value) if value is not None else DEFAULT_POLL_INTERVAL_MS
    except (TypeError, ValueError):
        return DEFAULT_POLL_INTERVAL_MS
    return parsed if parsed > 0 else DEFAULT_POLL_INTERVAL_MS


def get_max_block_range() -> int | None:
    value = _watcher_config().get("max_block_range")
    if value is None:
        return DEFAULT_MAX_BLOCK_RANGE
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_BLOCK_RANGE
    return parsed if parsed > 0 else None


def get_address_overrides(chain_id: int) -> dict[str, str]:
    addresses = CONFIG.get("addresses", {})
    per_chain = addresses.get(str(chain_id))
    if per_chain is None:
        per_chain = addresses.get(chain_id)  # allow int keys
    return dict(per_chain or {})
