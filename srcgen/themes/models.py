"""Schema of theme layer JSON files."""

from typing import Dict, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter

ColorValue = Union[int, float]
ColorTriple = Tuple[ColorValue, ColorValue, ColorValue]


class ThemeLayer(BaseModel):
    """Surface and glyph colours of one layer (``layer_<n>``)."""

    surface: Dict[str, ColorTriple] = Field(default_factory=dict, description="Surface colours by name")
    glyphs: Dict[str, ColorTriple] = Field(default_factory=dict, description="Glyph colours by name")


ThemeLayers = TypeAdapter(Dict[str, ThemeLayer])
