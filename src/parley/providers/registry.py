"""In-memory provider registry.

Hides the ordering of configured providers and which one is active.
Providers are identified only by their position in the registry.
"""

from collections.abc import Callable, Iterable, Iterator

from .models import ProviderConfig


class ProviderRegistry:
    """User-editable list of provider configurations with one active entry.

    With zero providers the active index still points at 0; this is the
    only selectable-but-absent state and active_provider() reports it as None.
    """

    def __init__(
        self,
        providers: Iterable[ProviderConfig] = (),
        active_index: int = 0,
        on_change: Callable[[], None] | None = None
    ):
        self._providers = list(providers)
        self._active_index = active_index
        self._on_change = on_change

    @property
    def providers(self) -> tuple[ProviderConfig, ...]:
        return tuple(self._providers)

    @property
    def active_index(self) -> int:
        return self._active_index

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._providers)

    def add_provider(self, config: ProviderConfig) -> int:
        """Append a provider and notify the change listener.

        Args:
            config: Provider to add

        Returns:
            Index of the new provider
        """
        self._providers.append(config)
        self._notify()
        return len(self._providers) - 1

    def select_provider(self, index: int) -> ProviderConfig:
        """Make the provider at index active.

        Raises:
            IndexError: If index is outside the registry's bounds
        """
        if not 0 <= index < len(self._providers):
            raise IndexError(f"Provider index {index} out of range (0..{len(self._providers) - 1})")
        self._active_index = index
        return self._providers[index]

    def active_provider(self) -> ProviderConfig | None:
        """Get the active provider, or None if the index points nowhere."""
        if 0 <= self._active_index < len(self._providers):
            return self._providers[self._active_index]
        return None

    def labels(self) -> list[str]:
        return [config.label for config in self._providers]

    def replace_all(self, configs: Iterable[ProviderConfig]) -> None:
        """Replace the whole list (used when loading from storage).

        The active index is left as is; it may now point nowhere.
        """
        self._providers = list(configs)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
