# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration loader for Mandrill settings.

Settings are read from an INI-style configuration file or from environment
variables.

Example:
    Configuration file format (config.ini)::

        [mandrill]
        api_key = md-XXXXXXXXXXXX
        endpoint = https://mandrillapp.com/api/1.0
        connect_timeout = 30
        timeout = 600
        async = true

    Loading the configuration::

        config = load_mandrill_config("/etc/mandrill/config.ini")
        mailer = MandrillMailer.from_config(config)
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from mandrill_mailer.logger import get_logger
from mandrill_mailer.transport import (
    DEFAULT_API_FORMAT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)


@dataclass
class MandrillConfig:
    """Settings for :class:`~mandrill_mailer.mailer.MandrillMailer`.

    Attributes:
        api_key: Mandrill API key (None until configured).
        endpoint: API base URL.
        api_format: Payload format of API calls.
        connect_timeout: Connection timeout in seconds.
        timeout: Response timeout in seconds.
        user_agent: User-Agent header value.
        async_sending: Ask Mandrill for asynchronous processing.
    """

    api_key: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    api_format: str = DEFAULT_API_FORMAT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    async_sending: bool = True


logger = get_logger("config_loader")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def load_mandrill_config(config_path: str | None = None) -> MandrillConfig:
    """Load Mandrill configuration from config file or environment.

    Priority: config file > environment variables > defaults.

    Environment variables:
        MANDRILL_API_KEY: Mandrill API key
        MANDRILL_ENDPOINT: API base URL
        MANDRILL_CONNECT_TIMEOUT: Connection timeout in seconds
        MANDRILL_TIMEOUT: Response timeout in seconds
        MANDRILL_USER_AGENT: User-Agent header value
        MANDRILL_ASYNC: Async processing flag (true/false)

    Args:
        config_path: Optional path to config.ini file

    Returns:
        MandrillConfig with parsed settings, using defaults for missing values.
    """
    defaults = MandrillConfig()
    config_values: dict = {}

    env_mapping = {
        "api_key": ("MANDRILL_API_KEY", str, defaults.api_key),
        "endpoint": ("MANDRILL_ENDPOINT", str, defaults.endpoint),
        "connect_timeout": ("MANDRILL_CONNECT_TIMEOUT", float, defaults.connect_timeout),
        "timeout": ("MANDRILL_TIMEOUT", float, defaults.timeout),
        "user_agent": ("MANDRILL_USER_AGENT", str, defaults.user_agent),
        "async_sending": ("MANDRILL_ASYNC", _parse_bool, defaults.async_sending),
    }

    for key, (env_var, type_fn, default) in env_mapping.items():
        env_value = os.environ.get(env_var)
        if env_value is not None:
            try:
                config_values[key] = type_fn(env_value)
            except (ValueError, TypeError):
                logger.warning(f"Invalid value for {env_var}, using default")
                config_values[key] = default
        else:
            config_values[key] = default

    if config_path and Path(config_path).exists():
        config = configparser.ConfigParser()
        config.read(config_path)

        if config.has_section("mandrill"):
            def get_float(key: str, default: float) -> float:
                try:
                    return config.getfloat("mandrill", key, fallback=default)
                except ValueError:
                    logger.warning(f"Invalid value for [mandrill] {key}, using default")
                    return default

            def get_bool(key: str, default: bool) -> bool:
                try:
                    return config.getboolean("mandrill", key, fallback=default)
                except ValueError:
                    logger.warning(f"Invalid value for [mandrill] {key}, using default")
                    return default

            config_values["api_key"] = config.get("mandrill", "api_key", fallback=config_values["api_key"])
            config_values["endpoint"] = config.get("mandrill", "endpoint", fallback=config_values["endpoint"])
            config_values["connect_timeout"] = get_float("connect_timeout", config_values["connect_timeout"])
            config_values["timeout"] = get_float("timeout", config_values["timeout"])
            config_values["user_agent"] = config.get("mandrill", "user_agent", fallback=config_values["user_agent"])
            config_values["async_sending"] = get_bool("async", config_values["async_sending"])
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using environment and defaults")

    return MandrillConfig(**config_values)
