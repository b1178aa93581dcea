# ledger/schemas/option_schema.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OptionView(BaseModel):
    """Proyección normalizada de una opción, sin importar el tipo de contenido."""
    model_config = ConfigDict(populate_by_name=True)

    identifier: str
    display_name: str = Field(..., alias="displayName")
    image_url: Optional[str] = Field(None, alias="imageUrl")
