from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProviderConfig(BaseModel):
    """A configured remote text-generation API endpoint.

    Field aliases are the keys used in the provider collection file
    (api_name, api_url, api_key, model).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    display_name: str = Field(alias="api_name", description="Name shown in the provider picker")
    endpoint_url: str = Field(alias="api_url", description="Full URL that chat requests are POSTed to")
    credential: str = Field(alias="api_key", repr=False, description="Bearer token sent with every request")
    model_identifier: str = Field(alias="model", description="Model name placed in the request body")

    @property
    def label(self) -> str:
        """Picker label: '<name> - <url>'."""
        return f"{self.display_name} - {self.endpoint_url}"

    def with_changes(self, **changes: Any) -> "ProviderConfig":
        """Return an edited copy; the original stays untouched."""
        return self.model_copy(update=changes)
