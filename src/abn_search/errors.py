# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by abn-search."""


class AbnSearchError(Exception):
    """Base class for all abn-search errors."""


class InvalidArgumentError(AbnSearchError, ValueError):
    """Search input was rejected before contacting the registry."""


class ConfigurationError(AbnSearchError):
    """No authentication GUID is configured."""


class RemoteError(AbnSearchError, RuntimeError):
    """The registry answered with an exception instead of a result."""

    def __init__(self, description: str | None) -> None:
        self.description = description
        super().__init__(f"Exception: {description or 'registry returned no result'}")


class TransportError(AbnSearchError, RuntimeError):
    """The registry could not be reached or its reply could not be read."""
