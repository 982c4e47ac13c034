"""
Runner: encode parameters read from JSON files.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from .encode import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, FormEncoder
from .errors import ConfigError
from .request import prepare

DEFAULT_CONFIG: Dict[str, Any] = {
    "loglevel": "INFO",
    "max_depth": DEFAULT_MAX_DEPTH,
    "sort_nested_keys": True,
}


class Runner:
    configfile: Optional[str] = None
    cfg: Dict[str, Any] = {}

    def __init__(self, configfile: Optional[str] = None):
        logging.basicConfig(
            level=logging.INFO,
            format=(
                "%(asctime)s %(name)s:%(levelname)-5s "
                "[%(funcName)s:%(lineno)4d] %(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.logger = logging.getLogger("Runner")

        self.configfile = configfile
        self.load_config()

    def load_config(self) -> None:
        cfg = dict(DEFAULT_CONFIG)
        if self.configfile is not None:
            with open(self.configfile, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ConfigError(f"{self.configfile} must hold an object")
            cfg.update(loaded)
        check_config(cfg)
        self.cfg = cfg

        lvl = self.cfg["loglevel"]
        self.logger.setLevel(lvl)
        self.encoder = FormEncoder(
            max_depth=self.cfg["max_depth"],
            sort_nested_keys=self.cfg["sort_nested_keys"],
        )
        self.encoder.logger.setLevel(lvl)
        self.logger.debug("Loaded config: %s", json.dumps(self.cfg))

    def load_params(self, paramsfile: str) -> Dict[str, Any]:
        with open(paramsfile, "r", encoding="utf-8") as f:
            params = json.load(f)
        if not isinstance(params, dict):
            raise ConfigError(f"{paramsfile} must hold an object")
        self.logger.info("Read %d parameters from %s", len(params), paramsfile)
        return params

    def encode_file(self, paramsfile: str) -> str:
        return self.encoder.encode(self.load_params(paramsfile))

    def prepare_file(
        self,
        paramsfile: str,
        method: str,
        url: str,
        destination: str = "auto",
    ) -> requests.PreparedRequest:
        return prepare(
            method,
            url,
            self.load_params(paramsfile),
            destination=destination,
            encoder=self.encoder,
        )


def check_config(cfg: Dict[str, Any]) -> None:
    lvl = cfg["loglevel"]
    if not isinstance(lvl, str) or not isinstance(
        logging.getLevelName(lvl.upper()), int
    ):
        raise ConfigError(f"loglevel={lvl!r} is not a logging level")
    cfg["loglevel"] = lvl.upper()

    depth = cfg["max_depth"]
    # bool is an int subclass
    if (
        isinstance(depth, bool)
        or not isinstance(depth, int)
        or not 1 <= depth <= MAX_DEPTH_LIMIT
    ):
        raise ConfigError(
            f"max_depth={depth!r} must be an integer between 1 and "
            f"{MAX_DEPTH_LIMIT}"
        )

    if not isinstance(cfg["sort_nested_keys"], bool):
        raise ConfigError(
            f"sort_nested_keys={cfg['sort_nested_keys']!r} must be true or "
            "false"
        )
