# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for the Mandrill mailer.

The actual logging setup (level, handlers, format) belongs to the
application entry point, configured via ``logging.basicConfig()``.

Example:
    Typical usage in a module::

        from mandrill_mailer.logger import get_logger

        logger = get_logger("transport")
        logger.info("Message dispatched")
"""

import logging


def get_logger(name: str = "MandrillMailer") -> logging.Logger:
    """Retrieve a named logger.

    No handlers or formatters are attached here; that responsibility lies
    with the application entry point.

    Args:
        name: The logger name. Defaults to "MandrillMailer".

    Returns:
        A ``logging.Logger`` instance bound to the given name.
    """
    return logging.getLogger(name)
