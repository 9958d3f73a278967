# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Client configuration."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

ABR_ENDPOINT = "https://abr.business.gov.au/abrxmlsearch/AbrXmlSearch.asmx"

ENV_GUID = "ABN_LOOKUP_GUID"
ENV_PROXY = "ABN_LOOKUP_PROXY"


@dataclass(frozen=True)
class ClientConfig:
    """Settings owned by one AbnSearchClient."""

    guid: str | None = None  # ABR web services authentication GUID
    proxy: str | None = None  # e.g. "http://proxy.local:3128"
    endpoint: str = ABR_ENDPOINT
    timeout: float = 30.0
    include_historical_details: bool = False

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "ClientConfig":
        """Read GUID and proxy from the environment; overrides that are not None win."""
        env = os.environ if environ is None else environ
        config = cls(guid=env.get(ENV_GUID) or None, proxy=env.get(ENV_PROXY) or None)
        return config.with_changes(**{k: v for k, v in overrides.items() if v is not None})

    def with_changes(self, **changes: Any) -> "ClientConfig":
        """Copy with the given fields replaced; an explicit None clears a field."""
        return replace(self, **changes)
