from .reader import parse_model, read_model
from .resolver import (
    CoordinateFields,
    EmbeddedPom,
    ExplicitPom,
    NoPom,
    PomSource,
    complete_coordinates,
    generate_model,
    generate_pom_file,
    read_embedded_pom,
    resolve_pom_source,
)
from .writer import write_model

__all__ = [
    "CoordinateFields",
    "EmbeddedPom",
    "ExplicitPom",
    "NoPom",
    "PomSource",
    "complete_coordinates",
    "generate_model",
    "generate_pom_file",
    "parse_model",
    "read_embedded_pom",
    "read_model",
    "resolve_pom_source",
    "write_model",
]
