from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class NewMachineRequest(BaseModel):
    """
    Body of ``POST /v0/machines/new``.

    Anything besides the known fields is machine configuration the upstream
    API understands; it is kept as pydantic extras so it survives untouched.
    """

    model_config = ConfigDict(extra="allow")

    app_name: str
    use_private_api: bool = False
    name: Optional[str] = None
    region: Optional[str] = None

    def machine_config(self) -> Dict[str, Any]:
        """The configuration payload sent upstream, without the proxy's own keys."""
        config: Dict[str, Any] = {}
        for field in ("name", "region"):
            if field in self.model_fields_set:
                config[field] = getattr(self, field)
        config.update(self.model_extra or {})
        return config


class ListMachinesRequest(BaseModel):
    """Query of ``GET /v0/machines/list``."""

    app_name: str
    use_private_api: bool = False
    include_deleted: bool = False
    region: Optional[str] = None
