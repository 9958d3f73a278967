# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""abn-search: validate ABN/ACN identifiers and look them up in the Australian Business Register."""

from importlib.metadata import version as _version

__version__ = _version("abn-search")

from abn_search.client import AbnSearchClient, NameSearchOptions
from abn_search.config import ClientConfig
from abn_search.entity import Entity
from abn_search.errors import (
    AbnSearchError,
    ConfigurationError,
    InvalidArgumentError,
    RemoteError,
    TransportError,
)
from abn_search.identifiers import (
    format_abn,
    format_acn,
    is_valid_abn,
    is_valid_acn,
    normalize,
)

__all__ = [
    "__version__",
    "AbnSearchClient",
    "AbnSearchError",
    "ClientConfig",
    "ConfigurationError",
    "Entity",
    "InvalidArgumentError",
    "NameSearchOptions",
    "RemoteError",
    "TransportError",
    "format_abn",
    "format_acn",
    "is_valid_abn",
    "is_valid_acn",
    "normalize",
]
