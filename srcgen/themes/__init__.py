"""Theme token flattening (`srcgen themes`)."""

from .generator import ThemeError, ThemeGenerator, layers_to_css_vars
from .models import ThemeLayer

__all__ = ["ThemeError", "ThemeGenerator", "ThemeLayer", "layers_to_css_vars"]
