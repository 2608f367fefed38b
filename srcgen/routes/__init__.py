"""Route localisation tables (`srcgen routes`)."""

from .generator import RouteTableGenerator, build_route_table, localisable_prefixes

__all__ = ["RouteTableGenerator", "build_route_table", "localisable_prefixes"]
