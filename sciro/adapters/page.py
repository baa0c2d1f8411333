"""
Static page context (PageContextPort implementation).

Python hosts have no browser page; embedders pass whatever context they
have. Fields left as None are reported as unavailable.
"""

from __future__ import annotations

from dataclasses import dataclass

from sciro.domain.errors import DefensiveReadError


@dataclass(frozen=True)
class StaticPageContext:
    page_url: str | None = None
    page_referrer: str | None = None
    page_user_agent: str | None = None

    def url(self) -> str | None:
        return self._require("url", self.page_url)

    def referrer(self) -> str | None:
        return self._require("referrer", self.page_referrer)

    def user_agent(self) -> str | None:
        return self._require("user_agent", self.page_user_agent)

    @staticmethod
    def _require(name: str, value: str | None) -> str:
        if value is None:
            raise DefensiveReadError(f"{name} not provided by host")
        return value
