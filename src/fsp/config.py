# -*- encoding: utf-8 -*-
"""
FSP configuration.

Lets a deployment force operations into memory, e.g. while the backing
store has no index for a column yet, or for a store that cannot page.

Environment variables (all optional, "cheap" or "expensive"):
    FSP_FILTER_COST: forced filter engine cost (default cheap)
    FSP_SORT_COST: forced sort engine cost (default cheap)
    FSP_PAGE_COST: page cost override (default: derived from filter/sort)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from fsp.parameters import Cost


@dataclass(frozen=True)
class FSPConfig:
    """
    Engine-level cost settings.

    Attributes:
        filter_cost: EXPENSIVE puts every filter group in memory
        sort_cost: EXPENSIVE sorts in memory even if all keys have columns
        page_cost: Explicit page cost; None derives it from filter and sort
    """
    filter_cost: Cost = Cost.CHEAP
    sort_cost: Cost = Cost.CHEAP
    page_cost: Optional[Cost] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FSPConfig":
        """
        Load the configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ValueError: If a variable holds something other than cheap/expensive
        """
        environ = os.environ if environ is None else environ
        page_cost = environ.get("FSP_PAGE_COST")
        return cls(
            filter_cost=Cost.parse(environ.get("FSP_FILTER_COST", "cheap")),
            sort_cost=Cost.parse(environ.get("FSP_SORT_COST", "cheap")),
            page_cost=Cost.parse(page_cost) if page_cost else None,
        )

    def to_dict(self) -> dict:
        return {
            "filter_cost": self.filter_cost.value,
            "sort_cost": self.sort_cost.value,
            "page_cost": self.page_cost.value if self.page_cost else None,
        }
