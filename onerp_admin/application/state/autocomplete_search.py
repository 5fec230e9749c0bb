"""Autocomplete search state: min-length guard plus short-lived result caching."""

from collections.abc import Awaitable, Callable

from onerp_admin.application.state.query_cache import QueryCache
from onerp_admin.domain.entities import AutocompleteOption

SearchFn = Callable[[str], Awaitable[list[AutocompleteOption]]]


class AutocompleteSearch:
    """Holds the input text and options of one autocomplete field.

    Text shorter than ``min_chars`` yields no options and no request. Results
    are cached under ``(key_prefix, "search", text)`` for ``stale_time``
    seconds, so retyping a recent query is free. ``options`` always belong to
    the current ``input_value``.
    """

    def __init__(
        self,
        search_action: SearchFn,
        cache: QueryCache,
        *,
        min_chars: int = 3,
        stale_time: float = 30.0,
        key_prefix: str = "autocomplete",
    ):
        self._search_action = search_action
        self._cache = cache
        self._min_chars = min_chars
        self._stale_time = stale_time
        self._key_prefix = key_prefix
        self.input_value = ""
        self.options: list[AutocompleteOption] = []

    async def search(self, text: str) -> list[AutocompleteOption]:
        self.input_value = text
        if len(text) < self._min_chars:
            self.options = []
            return self.options

        options = await self._cache.fetch(
            (self._key_prefix, "search", text),
            lambda: self._search_action(text),
            stale_time=self._stale_time,
        )
        # the input may have changed while this search was in flight
        if text == self.input_value:
            self.options = options
        return options

    @property
    def is_loading(self) -> bool:
        if len(self.input_value) < self._min_chars:
            return False
        return self._cache.is_fetching((self._key_prefix, "search", self.input_value))
