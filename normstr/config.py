from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .normalizers import (
    NFC,
    NFD,
    NFKC,
    NFKD,
    Filter,
    Lowercase,
    Nmt,
    Normalizer,
    Sequence,
    Strip,
    StripAccents,
    Uppercase,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "NORMSTR_CONFIG_PATH"
VERBOSE_LOGS_ENV = "NORMSTR_VERBOSE_LOGS"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

NORMALIZER_TYPES = {
    "nfc": NFC,
    "nfd": NFD,
    "nfkc": NFKC,
    "nfkd": NFKD,
    "nmt": Nmt,
    "lowercase": Lowercase,
    "uppercase": Uppercase,
    "strip": Strip,
    "strip_accents": StripAccents,
    "filter": Filter,
}

TRUTHY = {"1", "true", "yes", "on"}


def resolve_config_path(config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    raw = config_path if config_path is not None else os.getenv(CONFIG_PATH_ENV)
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Read the YAML config. A missing file or a non-mapping payload gives ``{}``."""
    path = resolve_config_path(config_path)
    if path is None or not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fp:
        payload = yaml.safe_load(fp) or {}
    return payload if isinstance(payload, dict) else {}


def configure_logging(verbose: Optional[bool] = None,
                      *,
                      config_path: Optional[Union[str, Path]] = None,
                      force: bool = False) -> bool:
    """
    Set up root logging for an application using normstr. The library itself never adds handlers.

    Args:
        verbose: DEBUG when True, WARNING when False. When ``None`` it comes from the
            ``NORMSTR_VERBOSE_LOGS`` env var, else from ``system.verbose_logs`` in the config file.
        config_path: config file to read, defaults to ``NORMSTR_CONFIG_PATH``
        force: replace handlers already installed on the root logger

    Returns:
        whether verbose logging was turned on
    """
    if verbose is None:
        env = os.getenv(VERBOSE_LOGS_ENV)
        if env is not None:
            verbose = env.strip().lower() in TRUTHY
        else:
            system = load_config(config_path).get("system")
            flag = system.get("verbose_logs", False) if isinstance(system, dict) else False
            verbose = flag.strip().lower() in TRUTHY if isinstance(flag, str) else bool(flag)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=DEFAULT_LOG_FORMAT,
        datefmt=DEFAULT_LOG_DATEFMT,
        force=force,
    )
    return verbose


def _build_normalizer(item: Union[str, Dict[str, Any]]) -> Normalizer:
    if isinstance(item, str):
        item = {"type": item}
    if not isinstance(item, dict) or "type" not in item:
        raise ValueError("Normalizer config entries need a `type`, got {!r}".format(item))

    options = dict(item)
    name = str(options.pop("type")).lower()
    if name not in NORMALIZER_TYPES:
        raise ValueError(
            "{} is not a known normalizer. Available are {}".format(name, list(NORMALIZER_TYPES))
        )
    try:
        return NORMALIZER_TYPES[name](**options)
    except TypeError as exc:
        raise ValueError("Invalid options for normalizer {}: {}".format(name, exc)) from exc


def normalizer_from_config(items: Optional[List[Union[str, Dict[str, Any]]]]) -> Sequence:
    """
    Build a :class:`Sequence` from a list such as::

        - nfd
        - type: strip_accents
        - type: strip
          strip_left: true
          strip_right: false
        - type: filter
          char: "_"
    """
    if items is None:
        items = []
    if not isinstance(items, list):
        raise ValueError("`normalizer` must be a list, got {}".format(type(items).__name__))
    normalizers = [_build_normalizer(item) for item in items]
    logger.debug("Built normalizer pipeline: %s", normalizers)
    return Sequence(normalizers)


def load_normalizer(config_path: Optional[Union[str, Path]] = None) -> Sequence:
    payload = load_config(config_path)
    return normalizer_from_config(payload.get("normalizer"))
