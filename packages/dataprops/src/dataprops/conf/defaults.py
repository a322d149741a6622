"""Default configuration values for dataprops."""

DEFAULTS: dict[str, object] = {
    # Extra qualified names treated as opaque leaves, on top of the built-in set
    "TERMINATOR_NAMES": (),
    # Members declared only on these bases are never enumerated
    "IGNORED_BASES": (
        "builtins.object",
        "typing.Generic",
        "typing.Protocol",
        "pydantic.main.BaseModel",
    ),
    "ACCESSOR_PREFIXES": ("get", "is"),
}
